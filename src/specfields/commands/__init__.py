"""Built-in CLI sub-commands for specfields.

* :mod:`~specfields.commands.build` -- compile a document and print every
  operation's fields as JSON.
* :mod:`~specfields.commands.inspect` -- tabular views of operations and
  of one operation's fields.

``build`` is a plain callback registered on the root app; ``inspect`` is a
:class:`typer.Typer` sub-application.
"""
