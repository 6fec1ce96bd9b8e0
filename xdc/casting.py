"""Dynamic casting between trait views of registered objects.

A *trait* is a class deriving from :class:`ObjBase` whose public methods
(functions, static/class methods and properties) form its interface.  A
*struct* is a concrete class registered with :func:`xdc_struct`; each trait
it implements is registered with :func:`xdc_impl`.  Casting an object to a
trait yields a :class:`CastView` exposing exactly that trait's interface,
bound to the original object, or ``None`` when the object's class has no
registration for the trait.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

__all__ = [
    "CastView",
    "MetadataEntry",
    "ObjBase",
    "metadata_entry",
    "try_cast",
    "try_cast_boxed",
    "try_cast_mut",
    "type_id",
    "xdc_impl",
    "xdc_struct",
]

_registry: dict[type, list["MetadataEntry"]] = {}
_registry_lock = threading.Lock()


@dataclass(frozen=True, eq=False)
class MetadataEntry:
    """How a struct class is seen through one trait."""

    typeid: type
    vtable: Mapping[str, Any]


class ObjBase:
    """Base of every castable struct and of every trait."""

    def get_metadata(self) -> tuple[MetadataEntry, ...]:
        """Return the metadata entries registered for this object's class."""
        cls = type(self)
        with _registry_lock:
            entries = _registry.get(cls)
            if entries is None:
                raise TypeError(f"{cls.__qualname__} is not registered with xdc_struct")
            return tuple(entries)


def type_id(trait: type) -> type:
    """Return the identity key used to look up a trait."""
    if not isinstance(trait, type):
        raise TypeError(f"trait must be a class, not {type(trait).__name__}")
    return trait


def _is_member(attr: Any) -> bool:
    return hasattr(attr, "__get__")


def _trait_members(trait: type) -> dict[str, Any]:
    members: dict[str, Any] = {}
    for klass in trait.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name.startswith("_") or name in members or not _is_member(attr):
                continue
            members[name] = attr
    return members


def _lookup(cls: type, name: str) -> Any:
    for klass in cls.__mro__:
        if klass is object:
            continue
        attr = vars(klass).get(name)
        if attr is not None and _is_member(attr):
            return attr
    return None


def metadata_entry(cls: type, trait: type) -> MetadataEntry:
    """Build the entry describing ``cls`` seen through ``trait``.

    Each member of the trait is taken from ``cls`` when it provides one,
    otherwise from the trait's own default.  A member left abstract is an
    error.
    """
    key = type_id(trait)
    if not isinstance(cls, type):
        raise TypeError(f"cls must be a class, not {type(cls).__name__}")
    vtable: dict[str, Any] = {}
    for name, default in _trait_members(trait).items():
        impl = _lookup(cls, name)
        if impl is None:
            impl = default
        if getattr(impl, "__isabstractmethod__", False):
            raise TypeError(
                f"{cls.__qualname__} does not implement {name!r} "
                f"required by {trait.__qualname__}"
            )
        vtable[name] = impl
    return MetadataEntry(typeid=key, vtable=MappingProxyType(vtable))


def xdc_struct(cls: type) -> type:
    """Register ``cls`` as a castable struct; usable as a decorator."""
    if not isinstance(cls, type) or not issubclass(cls, ObjBase):
        raise TypeError("xdc_struct requires a subclass of ObjBase")
    entry = metadata_entry(cls, ObjBase)
    with _registry_lock:
        if cls in _registry:
            raise ValueError(f"{cls.__qualname__} is already registered")
        _registry[cls] = [entry]
    return cls


def xdc_impl(trait: type, cls: type) -> type:
    """Record that ``cls`` implements ``trait``; returns ``cls``."""
    if not isinstance(trait, type) or not issubclass(trait, ObjBase):
        raise TypeError("trait must be a subclass of ObjBase")
    entry = metadata_entry(cls, trait)
    with _registry_lock:
        entries = _registry.get(cls)
        if entries is None:
            raise TypeError(f"{cls.__qualname__} is not registered with xdc_struct")
        if any(existing.typeid is entry.typeid for existing in entries):
            raise ValueError(
                f"{cls.__qualname__} already implements {trait.__qualname__}"
            )
        entries.append(entry)
    return cls


class CastView:
    """An object seen through a single trait."""

    __slots__ = ("_xdc_obj", "_xdc_entry", "_xdc_mutable")

    def __init__(self, obj: ObjBase, entry: MetadataEntry, mutable: bool = False) -> None:
        object.__setattr__(self, "_xdc_obj", obj)
        object.__setattr__(self, "_xdc_entry", entry)
        object.__setattr__(self, "_xdc_mutable", mutable)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_xdc_"):
            raise AttributeError(name)
        entry = self._xdc_entry
        try:
            member = entry.vtable[name]
        except KeyError:
            raise AttributeError(
                f"{entry.typeid.__qualname__} has no member {name!r}"
            ) from None
        obj = self._xdc_obj
        return member.__get__(obj, type(obj))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("cast views cannot be assigned to")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("cast views cannot be assigned to")

    def __dir__(self) -> list[str]:
        return sorted(self._xdc_entry.vtable)

    def __repr__(self) -> str:
        kind = "mut " if self._xdc_mutable else ""
        return f"<{kind}{self._xdc_entry.typeid.__qualname__} view of {self._xdc_obj!r}>"


def _cast(trait: type, obj: Any, mutable: bool) -> CastView | None:
    if not isinstance(trait, type) or not issubclass(trait, ObjBase):
        raise TypeError("trait must be a subclass of ObjBase")
    if isinstance(obj, CastView):
        if mutable and not obj._xdc_mutable:
            raise TypeError("cannot obtain a mutable cast from an immutable view")
        source = obj._xdc_obj
    else:
        source = obj
    if not isinstance(source, ObjBase):
        raise TypeError(f"{type(source).__qualname__} is not castable")
    key = type_id(trait)
    entry = next((e for e in source.get_metadata() if e.typeid is key), None)
    if entry is None:
        return None
    return CastView(source, entry, mutable)


def try_cast(trait: type, obj: Any) -> CastView | None:
    """Cast ``obj`` (an object or a view) to ``trait``; ``None`` if unsupported."""
    return _cast(trait, obj, mutable=False)


def try_cast_mut(trait: type, obj: Any) -> CastView | None:
    """Cast to a mutable view; an immutable view cannot be the source."""
    return _cast(trait, obj, mutable=True)


def try_cast_boxed(trait: type, obj: Any) -> CastView | None:
    """Cast an owned object to a view that takes it over."""
    return _cast(trait, obj, mutable=True)