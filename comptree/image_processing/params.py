# -*- coding: utf-8 -*-
"""
Tunable Parameter Annotations - Declarative builder options via typing.Annotated.

Component tree builders and image transforms declare their options as
class-body ``typing.Annotated`` fields carrying constraint markers
(``Range``, ``Options``, ``Desc``). ``ImageProcessor.__init_subclass__``
turns those fields into ``ParamSpec`` records and, unless the class writes
its own, a keyword-only ``__init__`` that validates every value::

    from typing import Annotated
    from comptree.image_processing.params import Options, Desc

    class ThresholdStack(ImageTransform):
        connectivity: Annotated[int, Options(4, 8), Desc('Pixel adjacency')] = 4

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import inspect
from typing import (
    Annotated,
    Any,
    Callable,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# COMPTREE internal
from comptree.exceptions import ValidationError

Number = Union[int, float]


# =====================================================================
# Constraint markers
# =====================================================================

class ParamMeta:
    """Base marker for parameter metadata inside ``Annotated[...]``.

    A field is tunable when its metadata holds at least one instance of
    a ``ParamMeta`` subclass.
    """


class Range(ParamMeta):
    """Inclusive numeric bounds.

    Parameters
    ----------
    min : int or float, optional
        Smallest allowed value.
    max : int or float, optional
        Largest allowed value.
    """

    __slots__ = ('min', 'max')

    def __init__(
        self,
        min: Optional[Number] = None,
        max: Optional[Number] = None,
    ) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        bounds = []
        if self.min is not None:
            bounds.append(f"min={self.min!r}")
        if self.max is not None:
            bounds.append(f"max={self.max!r}")
        return f"Range({', '.join(bounds)})"


class Options(ParamMeta):
    """Finite set of allowed values.

    Parameters
    ----------
    *choices
        Allowed values. At least one is required.
    """

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


class Desc(ParamMeta):
    """Human-readable description of a parameter."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


# =====================================================================
# ParamSpec
# =====================================================================

_SENTINEL = object()


class ParamSpec:
    """Resolved description of one tunable parameter.

    Attributes
    ----------
    name : str
        Keyword-argument name.
    param_type : type
        Declared Python type.
    default : Any
        Default value (``None`` when the parameter is required).
    description : str
        Text from ``Desc``, or ``''``.
    min_value, max_value : int, float, or None
        Bounds from ``Range``.
    choices : tuple or None
        Allowed values from ``Options``.
    """

    __slots__ = (
        'name', 'param_type', 'default', '_has_default',
        'description', 'min_value', 'max_value', 'choices',
    )

    def __init__(
        self,
        name: str,
        param_type: type,
        default: Any,
        has_default: bool,
        description: str,
        min_value: Optional[Number],
        max_value: Optional[Number],
        choices: Optional[Tuple],
    ) -> None:
        self.name = name
        self.param_type = param_type
        self.default = default
        self._has_default = has_default
        self.description = description
        self.min_value = min_value
        self.max_value = max_value
        self.choices = choices

    @property
    def required(self) -> bool:
        """True when the parameter has no default."""
        return not self._has_default

    def validate(self, value: Any) -> None:
        """Check *value* against the declared type and constraints.

        ``int`` is accepted for ``float`` parameters; ``bool`` is never
        accepted for numeric parameters. ``object`` disables the type
        check.

        Raises
        ------
        TypeError
            If *value* has the wrong type.
        ValidationError
            If *value* is outside the range or not one of the choices.
        """
        if self.param_type is float:
            ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        elif self.param_type is int:
            ok = isinstance(value, int) and not isinstance(value, bool)
        elif self.param_type is object:
            ok = True
        else:
            ok = isinstance(value, self.param_type)
        if not ok:
            raise TypeError(
                f"Parameter '{self.name}' must be "
                f"{self.param_type.__name__}, got {type(value).__name__}"
            )

        if self.min_value is not None and value < self.min_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is below minimum {self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is above maximum {self.max_value!r}"
            )
        if self.choices is not None and value not in self.choices:
            raise ValidationError(
                f"Parameter '{self.name}' value {value!r} "
                f"is not in allowed choices {self.choices!r}"
            )

    def __repr__(self) -> str:
        text = (
            f"ParamSpec(name={self.name!r}, "
            f"param_type={self.param_type.__name__}, "
            f"required={self.required!r}"
        )
        if not self.required:
            text += f", default={self.default!r}"
        if self.min_value is not None:
            text += f", min_value={self.min_value!r}"
        if self.max_value is not None:
            text += f", max_value={self.max_value!r}"
        if self.choices is not None:
            text += f", choices={self.choices!r}"
        return text + ")"


# =====================================================================
# Collection
# =====================================================================

def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Build ``ParamSpec`` records from the ``Annotated`` fields of *cls*.

    Fields are ordered parent-first along the MRO, in declaration order
    within each class. A subclass redeclaring a field replaces the
    parent's constraints and default.

    Raises
    ------
    TypeError
        If one field carries both ``Range`` and ``Options``.
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return ()

    ordered = []
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name in hints and name not in ordered:
                ordered.append(name)

    specs = []
    for name in ordered:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue
        metas = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not metas:
            continue

        bounds = next((m for m in metas if isinstance(m, Range)), None)
        options = next((m for m in metas if isinstance(m, Options)), None)
        desc = next((m for m in metas if isinstance(m, Desc)), None)
        if bounds is not None and options is not None:
            raise TypeError(
                f"Parameter '{name}' on {cls.__qualname__}: "
                f"Range and Options are mutually exclusive."
            )

        default = getattr(cls, name, _SENTINEL)
        has_default = default is not _SENTINEL
        specs.append(ParamSpec(
            name=name,
            param_type=hint.__args__[0],
            default=default if has_default else None,
            has_default=has_default,
            description=desc.text if desc else '',
            min_value=bounds.min if bounds else None,
            max_value=bounds.max if bounds else None,
            choices=options.choices if options else None,
        ))
    return tuple(specs)


# =====================================================================
# __init__ generation
# =====================================================================

def _make_init(param_specs: Tuple[ParamSpec, ...]) -> Callable[..., None]:
    """Build a keyword-only ``__init__`` for *param_specs*.

    Missing keywords fall back to the ParamSpec default; every value is
    validated before assignment; unknown keywords raise ``TypeError``;
    ``__post_init__`` runs last when the class defines it.
    """
    specs = param_specs
    known = frozenset(s.name for s in specs)

    def __init__(self, **kwargs: Any) -> None:
        unexpected = set(kwargs) - known
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected "
                f"keyword arguments: {', '.join(sorted(unexpected))}"
            )
        for spec in specs:
            if spec.name in kwargs:
                value = kwargs[spec.name]
            elif spec._has_default:
                value = spec.default
            else:
                raise TypeError(
                    f"{type(self).__name__}() missing required "
                    f"keyword argument: '{spec.name}'"
                )
            spec.validate(value)
            object.__setattr__(self, spec.name, value)

        if hasattr(self, '__post_init__'):
            self.__post_init__()

    params = [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    for spec in specs:
        if spec._has_default:
            params.append(inspect.Parameter(
                spec.name, inspect.Parameter.KEYWORD_ONLY, default=spec.default,
            ))
        else:
            params.append(inspect.Parameter(
                spec.name, inspect.Parameter.KEYWORD_ONLY,
            ))
    __init__.__signature__ = inspect.Signature(params)
    __init__.__qualname__ = '__init__'
    return __init__
