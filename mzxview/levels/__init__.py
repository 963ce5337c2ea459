"""World loading.

The viewer reads worlds from a JSON *world document* (see
:mod:`mzxview.levels.document` for the schema). Other formats can be plugged
in through the :class:`~mzxview.levels.document.WorldLoader` protocol.
"""

from .document import WorldLoader, load_world, parse_world

__all__ = ["WorldLoader", "load_world", "parse_world"]
