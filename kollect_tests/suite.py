import time
import traceback
from functools import wraps
from typing import List, Dict, Any, Callable, Optional, Type

# registered tests and the outcome of the last run
_registry: Dict[str, List[Dict[str, Any]]] = {
    'tests': [],
    'results': []
}


class _c:
    """ansi color codes."""
    ok = '\033[92m'
    fail = '\033[91m'
    warn = '\033[93m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


class TestAssertionError(AssertionError):
    """raised by assert_that, so failed checks can be told apart from crashes."""
    __test__ = False


# --- public api ---

def test(description: str) -> Callable:
    """register a function as a test case. the function keeps its name, so pytest collects it too."""

    def decorator(func: Callable) -> Callable:
        _registry['tests'].append({'func': func, 'description': description})

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


# the decorator itself matches pytest's naming pattern
test.__test__ = False


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    if not condition:
        raise TestAssertionError(message)


def assert_raises(error_type: Type[BaseException], action: Callable[[], Any],
                  message: Optional[str] = None) -> BaseException:
    """run action and check that it fails with error_type; returns the error for further checks."""
    try:
        action()
    except error_type as e:
        return e
    raise TestAssertionError(message or f"expected {error_type.__name__} to be raised")


def run(title: str = "test run", verbose: bool = False) -> bool:
    """run every registered test, print a report and return whether all passed."""
    print(f"\n{_c.info}--- {title} ---{_c.reset}")
    started = time.perf_counter()
    _registry['results'] = []

    for entry in _registry['tests']:
        error = None
        try:
            entry['func']()
        except TestAssertionError as e:
            error = f"assertion failed: {e}"
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            if verbose:
                traceback.print_exc()

        _registry['results'].append({'passed': error is None, 'description': entry['description'], 'error': error})
        if error is None:
            print(f"  {_c.ok}pass{_c.reset}  {entry['description']}")
        else:
            print(f"  {_c.fail}FAIL{_c.reset}  {entry['description']}")
            print(f"        {_c.grey}{error}{_c.reset}")

    all_passed = _report(started)
    # a script may run several suites in a row
    _registry['tests'] = []
    return all_passed


def _report(started: float) -> bool:
    elapsed_ms = (time.perf_counter() - started) * 1000
    results = _registry['results']
    failed = sum(1 for r in results if not r['passed'])
    color = _c.ok if failed == 0 else _c.fail
    print(f"\n{color}{len(results) - failed}/{len(results)} passed{_c.reset} "
          f"in {_c.warn}{elapsed_ms:.2f}ms{_c.reset}\n")
    return failed == 0
