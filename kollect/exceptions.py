class CollectionError(Exception):
    """base for every error raised by kollect"""


class InvalidArgument(CollectionError, ValueError):
    """an argument (usually a source) is not something a collection can work with"""


class InvalidReturnValue(CollectionError, TypeError):
    """a callback, factory or selector produced something unusable"""


class DuplicateKey(CollectionError, ValueError):
    """a key was observed twice during one pass while strict unique keys are enabled"""

    def __init__(self, key=None):
        self.key = key
        message = 'either call values() or strict_unique_keys(False) before you act on the collection.'
        if key is not None:
            message = f"duplicate key {key!r}: {message}"
        super().__init__(message)


class EmptyCollection(CollectionError, ValueError):
    """the operation needs at least one element"""


class InvalidType(CollectionError, TypeError):
    """a typed collection received an element of the wrong type"""


class SourceExhausted(CollectionError, RuntimeError):
    """a single-use sequence was already consumed and there is no factory to recreate it"""
