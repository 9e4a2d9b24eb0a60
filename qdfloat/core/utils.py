"""General utilities, such as exception classes."""

# qdfloat-specific exceptions

class QDError(Exception):
    """Base qdfloat error."""

class ContractError(QDError):
    """A calling contract was violated. This is always a programming mistake,
    never a property of the data being computed on.
    """

class LimbIndexError(ContractError, IndexError):
    """Limb index out of range."""

class ConversionError(QDError, ValueError):
    """A value could not be converted to or from an extended precision number."""


# some common data structures

class ImmutableDict(dict):
    """A dict that refuses every change after it has been built."""

    def _refuse(self, *args, **kwargs):
        raise ValueError('{} cannot be modified'.format(type(self).__name__))

    __setitem__ = _refuse
    __delitem__ = _refuse
    __ior__ = _refuse
    clear = _refuse
    pop = _refuse
    popitem = _refuse
    setdefault = _refuse
    update = _refuse
