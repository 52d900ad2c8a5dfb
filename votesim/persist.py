'''Serialization of votesim objects to JSON-ready dictionaries.

Evaluators, voters and profiles can be turned into plain dictionaries with
:func:`to_dict` and rebuilt with :func:`from_dict`, which is useful to record
the exact setup of a simulation trial so that it can be rerun later.

An object is stored as a dictionary with its fully qualified class name
under the ``class`` key and its constructor arguments under their parameter
names. Utility vectors, ballots and other sequences become JSON lists (the
constructors accept any sequence), named functions such as tie-breakers and
approval thresholds are stored by their qualified name, and fractions as
a numerator/denominator pair.
'''

import importlib
import inspect
from fractions import Fraction
from typing import Any, Dict


CLASS_KEY = 'class'
CALLABLE_KEY = 'callable'
FRACTION_KEY = 'fraction'

ATOMIC_TYPES = (str, int, float, bool, type(None))


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The resulting method will serialize all object attributes corresponding
    to the class's constructor parameter names (or to the names listed in the
    ``serialize_params`` class attribute, if present). Therefore, this
    decorator is only useful when the class stores its original parameters
    unchanged under the same names.

    :param class_: The class to add the method to.
    '''
    if hasattr(class_, 'serialize_params'):
        param_names = list(class_.serialize_params)
    elif class_.__init__ is object.__init__:
        param_names = []
    else:
        param_names = [
            name for name in inspect.signature(class_.__init__).parameters
            if name != 'self'
        ]

    def to_dict(self) -> Dict[str, Any]:
        out_dict = {CLASS_KEY: qualified_name(type(self))}
        for attr in param_names:
            out_dict[attr] = serialize_value(getattr(self, attr))
        return out_dict

    class_.to_dict = to_dict
    return class_


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, ATOMIC_TYPES):
        return value
    elif isinstance(value, Fraction):
        return {FRACTION_KEY: [value.numerator, value.denominator]}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    elif callable(value) and hasattr(value, '__qualname__'):
        if '<' in value.__qualname__:
            raise ValueError(f'cannot serialize local function {value!r}')
        return {CALLABLE_KEY: qualified_name(value)}
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        if CLASS_KEY in value:
            return _build(value)
        elif CALLABLE_KEY in value:
            return resolve(value[CALLABLE_KEY])
        elif FRACTION_KEY in value:
            return Fraction(*value[FRACTION_KEY])
        else:
            raise ValueError(f'cannot deserialize {value!r}, no known key')
    elif isinstance(value, ATOMIC_TYPES):
        return value
    elif isinstance(value, list):
        return [deserialize_value(item) for item in value]
    else:
        raise ValueError(f'cannot deserialize {value!r}, type unknown')


def _build(clsdef: Dict[str, Any]) -> Any:
    cls = resolve(clsdef[CLASS_KEY])
    params = {
        key: deserialize_value(val)
        for key, val in clsdef.items() if key != CLASS_KEY
    }
    return cls(**params)


def resolve(identifier: str) -> Any:
    '''Return the object under a qualified name, importing its module.'''
    if not is_qualified_name(identifier) or '.' not in identifier:
        raise ValueError(f'invalid qualified name: {identifier!r}')
    module_name, name = identifier.rsplit('.', 1)
    return getattr(importlib.import_module(module_name), name)


def from_dict(value: Dict[str, Any]) -> Any:
    """Rebuild a votesim object from a JSON-like dictionary.

    :param value: A dictionary created by :func:`to_dict`.
    :raises ValueError: If the dictionary does not describe an object.
    """
    if not isinstance(value, dict):
        raise ValueError('invalid votesim object def: dict expected,'
                         f' got {value!r}')
    elif CLASS_KEY not in value:
        raise ValueError('invalid votesim object def: must have a class key')
    return deserialize_value(value)


def to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize a votesim object to a JSON-ready dictionary.

    :param obj: An evaluator, voter, profile or similar object providing
        a `to_dict()` method (courtesy of the simple_serialization
        decorator for most of them).
    """
    if not hasattr(obj, 'to_dict'):
        raise ValueError(f'{obj!r} is not a serializable votesim object')
    return obj.to_dict()


def is_qualified_name(value: Any) -> bool:
    return (
        isinstance(value, str)
        and all(chunk.isidentifier() for chunk in value.split('.'))
    )


def qualified_name(obj: Any) -> str:
    return '.'.join((obj.__module__, obj.__qualname__))
