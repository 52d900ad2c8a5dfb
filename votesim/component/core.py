'''Named registers of interchangeable components.

Tie-breakers, rank scorers and pairwise win scorers can be referred to by
name in evaluator and voter constructors, which keeps the serialized form of
those objects short and readable. There should normally be no need to use
this module directly.
'''

from typing import Callable, Dict, Tuple, Union


def register_functions(register: Dict[str, Callable],
                       kind: str,
                       ) -> Tuple[Callable, Callable, Callable]:
    '''Build the functions to fill and query a register of components.

    :param register: The dictionary holding the components by name.
    :param kind: What the components are, used in error messages.
    :returns: A decorator registering a component under its ``__name__``,
        a function retrieving a component by name, and a function resolving
        a name to a component while passing callables through unchanged.
    '''
    def mark(component: Callable) -> Callable:
        register[component.__name__] = component
        return component

    def get(name: str) -> Callable:
        try:
            return register[name]
        except KeyError:
            known = ', '.join(sorted(register))
            raise KeyError(f'unknown {kind} {name!r}, known: {known}')

    def construct(definition: Union[str, Callable]) -> Callable:
        return definition if callable(definition) else get(definition)

    get.__doc__ = f'Return a {kind} by its name.'
    construct.__doc__ = (
        f'Get a {kind} by its name, or pass a custom callable through.'
    )
    return mark, get, construct
