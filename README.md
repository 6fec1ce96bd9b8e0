# xdc

Experimental dynamic casting for Python objects.

An *interface* (trait) is a class that derives from `ObjBase`. Its public methods, static and class methods, and properties make up what the interface offers. A concrete class is registered once with `xdc_struct`. Each interface that the class implements is then declared with `xdc_impl`. You can cast any object of a registered class to any interface declared for that class. A cast to an undeclared interface returns `None`.

## Installation

```
pip install .
```

## Usage

```python
from xdc.casting import ObjBase, xdc_struct, xdc_impl, try_cast


class HasId(ObjBase):
    def id(self):
        raise NotImplementedError


class HasColor(ObjBase):
    def color(self):
        raise NotImplementedError


class HasTaste(ObjBase):
    def taste(self):
        raise NotImplementedError


class Point(HasId, HasColor):
    def __init__(self, id_, col):
        self._id = id_
        self._col = col

    def id(self):
        return self._id

    def color(self):
        return self._col


xdc_struct(Point)
xdc_impl(HasId, Point)
xdc_impl(HasColor, Point)

point = Point(123, 3)
as_id = try_cast(HasId, point)
as_color = try_cast(HasColor, as_id)
assert as_color.color() == 3

assert try_cast(HasTaste, point) is None
```

You can use `xdc_struct` as a class decorator, because it returns the class. `xdc_impl(trait, cls)` also returns `cls`.

## Cast views

A cast returns a `CastView`:

- The view exposes only the members of the target interface.
- Each member is bound to the original object.
- For each member, the view uses the class's own definition when the class has one, and otherwise the interface's default.
- You cannot assign attributes on a view or delete them. Trying raises `AttributeError`.

You can pass a view back into a cast function to reach another interface declared for the same class.

The module provides three cast functions, and each takes `(trait, obj)`:

- `try_cast` returns a read-only view.
- `try_cast_mut` returns a view marked as mutable. Its source can be an object or another mutable view. If you pass a read-only view, it raises `TypeError`.
- `try_cast_boxed` behaves like `try_cast_mut`. It is meant for handing an owned object over to the view.

## Errors

Each cast function returns `None` when the object's class has no entry for the target interface. The following mistakes raise errors instead:

- Casting an object that is not an `ObjBase` raises `TypeError`.
- Casting to something that is not an `ObjBase` subclass raises `TypeError`.
- Calling `xdc_impl` for a class that was never passed to `xdc_struct` raises `TypeError`.
- Calling `get_metadata` on an object of such a class raises `TypeError`.
- Registering a class twice raises `ValueError`.
- Declaring the same interface twice for one class raises `ValueError`.
- Declaring an interface whose member is still abstract for the class raises `TypeError`.

## Lower-level building blocks

- `type_id(trait)` gives the key under which an interface is registered. The key is the interface class itself.
- `metadata_entry(cls, trait)` builds the `MetadataEntry` that describes a class seen through an interface. The entry has a `typeid` and a read-only `vtable` mapping of member names.
- `ObjBase.get_metadata()` returns the entries registered for an object's class, as a tuple. The first entry is for `ObjBase` itself.

## Running the tests

```
pip install ".[test]"
pytest
```