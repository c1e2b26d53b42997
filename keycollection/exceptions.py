class CollectionError(Exception):
    pass

class CollectionDestroyedError(CollectionError, RuntimeError):

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Collection has been destroyed, cannot call '{operation}'")

class InvalidKeyTypeError(CollectionError, TypeError):

    def __init__(self, key):
        self.key = key
        super().__init__(
            f"Invalid key type: {type(key).__name__} ({key!r}), "
            f"expected str, int, float (not NaN) or a list/tuple of them"
        )
