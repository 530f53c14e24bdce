def internal_only(func):
    """Decorator to mark a function or class as deliberately left out of the public API."""
    func.__internal_only__ = True
    return func


def is_internal_only(obj) -> bool:
    """
    Whether the given object was marked with ``internal_only``.
    """
    return getattr(obj, "__internal_only__", False)


internal_only(internal_only)
