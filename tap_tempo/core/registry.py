"""
Registry for presenters.

This module provides functions to register and build presenter implementations.
"""
from typing import Any, Callable, Dict, List, Optional, Type

from tap_tempo.core.displays.base import DisplayConfig
from tap_tempo.core.protocols import Presenter

# Registry of available presenters
_PRESENTERS: Dict[str, Type[Presenter]] = {}


def register(name: str) -> Callable:
    """
    Decorator to register a presenter implementation.

    Parameters
    ----------
    name : str
        Name of the presenter to register.

    Returns
    -------
    Callable
        Decorator function that registers the class.

    Examples
    --------
    >>> @register("my_presenter")
    >>> class MyPresenter(BasePresenter):
    >>>     ...
    """
    def decorator(cls: Type[Presenter]) -> Type[Presenter]:
        if name in _PRESENTERS:
            raise ValueError(f"Presenter with name '{name}' is already registered")
        _PRESENTERS[name] = cls
        return cls
    return decorator


def available() -> List[str]:
    """Names of all registered presenters, sorted."""
    return sorted(_PRESENTERS)


def build(name: str, config: Optional[DisplayConfig] = None, **kwargs: Any) -> Presenter:
    """
    Build a presenter instance by name.

    Parameters
    ----------
    name : str
        Name of the presenter.
    config : DisplayConfig, optional
        Display options. Built from ``precision``/``color`` in kwargs when omitted.
    **kwargs : Any
        Remaining keyword arguments passed to the presenter constructor.

    Returns
    -------
    Presenter
        An instance of the requested presenter.

    Raises
    ------
    ValueError
        If no presenter is registered under ``name``.
    """
    if name not in _PRESENTERS:
        supported = ", ".join(f'"{n}"' for n in available())
        raise ValueError(
            f'Unsupported display: "{name}". '
            f'Supported displays are: {supported}.'
        )

    if config is None:
        config_params = {}
        if 'precision' in kwargs:
            config_params['precision'] = kwargs.pop('precision')
        if 'color' in kwargs:
            config_params['color'] = kwargs.pop('color')
        config = DisplayConfig(**config_params)

    return _PRESENTERS[name](config, **kwargs)
