"""recordgen - ahead-of-time boilerplate generation for record classes.

Expands ``@record(...)`` classes in ``.pyrec`` templates into plain Python
classes with a generated constructor, repr, equality, ordering, hash,
read-only fields and ``__copy__``, selected per class by boolean options.
"""

__version__ = "0.1.0"
