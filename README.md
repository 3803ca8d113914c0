# cordlgen

Building blocks for generating C++ headers that describe managed types:
name handling, C++ member models, their serialisation into header text,
and helpers for field layout and field accessors.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Overview

- `cordlgen.name_components.NameComponents`: a managed type name split into
  namespace, declaring types, name and generics. `combine_all()` gives the
  `Namespace.Outer/Inner<A,B>` form; `remove_generics()`,
  `remove_namespace()`, `into_ref_generics()` and `formatted_name()` derive
  variants.
- `cordlgen.cpp_name_components.CppNameComponents`: the C++ side of a name.
  `combine_all()` produces `::Namespace::Name<A,B>*`; `as_pointer()`,
  `remove_pointer()`, `remove_generics()` and `into_ref_generics()` return
  modified copies, and `from_name_components()` converts a `NameComponents`.
- `cordlgen.members`: frozen data classes for templates, static asserts,
  lines, forward declarations, commented strings, includes, using aliases,
  field declarations and definitions, properties and parameters, plus the
  `params_*` helpers that format parameter lists.
- `cordlgen.methods`: method and constructor declarations and definitions,
  nested structs and unions, and the method size/metadata structure.
- `cordlgen.writer`: `CodeWriter`, a line-oriented text sink (an in-memory
  buffer by default, or any text stream), and `write_*` functions for the
  simple members.
- `cordlgen.serialize`: `write_*` functions for methods, constructors,
  nested types and method size structs; `write_member()` dispatches on the
  member's type and `render(member)` returns the text of one member.
- `cordlgen.field_layout`: backing-field names, accessor names, static
  offset asserts, renaming of fields shadowed by properties, and packing of
  explicitly laid out fields into a single union.
- `cordlgen.field_accessors`: `FieldInfo` and functions that build the
  property, getter and setter members for instance, static and constant
  fields.

## Example

```python
from cordlgen.cpp_name_components import CppNameComponents
from cordlgen.field_layout import fixup_backing_field
from cordlgen.methods import CppMethodDecl
from cordlgen.serialize import render

name = CppNameComponents(namespace="System", name="List_1", generics=["int32_t"])
name.as_pointer().combine_all()   # "::System::List_1<int32_t>*"

fixup_backing_field("count")      # "___count"

render(CppMethodDecl(cpp_name="get_Count", return_type="int32_t", is_inline=True))
# "inline int32_t get_Count() ;\n"
```

## What this package does not do

It works on names and member descriptions that the caller supplies. It
does not read type metadata, does not turn arbitrary managed names into
safe C++ identifiers or include paths, does not lay out or write header
files to disk, and has no command-line tool.