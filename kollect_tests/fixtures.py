"""
shared test data: a fixed cast of characters and seeded, generated records.
"""
import numpy as np
from faker import Faker
from typing import Any, Dict, List, Optional

CHARACTERS: List[Dict[str, Any]] = [
    {'id': 1, 'name': 'Eddard Stark', 'age': 34},
    {'id': 2, 'name': 'Catelyn Stark', 'age': 33},
    {'id': 3, 'name': 'Daenerys Targaryen', 'age': 13},
    {'id': 4, 'name': 'Tyrion Lannister', 'age': 24},
    {'id': 5, 'name': 'Jon Snow', 'age': 14},
    {'id': 6, 'name': 'Brandon Stark', 'age': 7},
    {'id': 7, 'name': 'Sansa Stark', 'age': 11},
    {'id': 8, 'name': 'Arya Stark', 'age': 9},
    {'id': 9, 'name': 'Theon Greyjoy', 'age': 18},
    {'id': 10, 'name': 'Davos Seaworth', 'age': 37},
    {'id': 11, 'name': 'Jaime Lannister', 'age': 31},
    {'id': 12, 'name': 'Samwell Tarly', 'age': 14},
    {'id': 13, 'name': 'Cersei Lannister', 'age': 31},
    {'id': 14, 'name': 'Brienne of Tarth', 'age': 17},
    {'id': 15, 'name': 'Brandon Stark Twin', 'age': 7},
    {'id': 16, 'name': 'Davos Seaworth Twin', 'age': 37},
]

AGES = [character['age'] for character in CHARACTERS]


def characters() -> List[Dict[str, Any]]:
    """a fresh copy, so tests cannot leak edits into each other"""
    return [dict(character) for character in CHARACTERS]


class RecordGenerator:
    """
    builds records from a small schema. a field spec is a faker provider name, a
    (provider, kwargs) tuple, or {'choice': [...]} for a pick from fixed options.
    """

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)

    def _field(self, spec: Any) -> Any:
        if isinstance(spec, dict) and 'choice' in spec:
            picked = self._rng.choice(spec['choice'])
            # numpy scalars back to python types
            return picked.item() if hasattr(picked, 'item') else picked
        if isinstance(spec, tuple) and len(spec) == 2:
            provider, kwargs = spec
            return getattr(self._fake, provider)(**kwargs)
        if isinstance(spec, str):
            if not hasattr(self._fake, spec):
                raise ValueError(f"faker has no provider '{spec}'")
            return getattr(self._fake, spec)()
        return spec

    def record(self, schema: Dict[str, Any]) -> Dict[str, Any]:
        return {name: self._field(spec) for name, spec in schema.items()}

    def records(self, schema: Dict[str, Any], count: int) -> List[Dict[str, Any]]:
        return [self.record(schema) for _ in range(count)]


PERSON_SCHEMA = {
    'name': 'name',
    'age': ('pyint', {'min_value': 18, 'max_value': 65}),
    'department': {'choice': ['eng', 'sales', 'hr', 'marketing']},
    'active': ('pybool', {}),
}


def people(count: int = 20, seed: int = 42) -> List[Dict[str, Any]]:
    """generated people with sequential ids, so ids are unique"""
    generated = RecordGenerator(seed).records(PERSON_SCHEMA, count)
    return [{'id': index, **person} for index, person in enumerate(generated, start=1)]
