"""crate-edit: add and remove dependencies in a Cargo.toml manifest.

Built as a strict layered application: a pure ``core`` resolving crate
references into dependency descriptors and manifest sections, an
``infra`` layer talking to crates.io and the filesystem, and a ``cli``
layer owning all terminal output.
"""

from crate_edit.version import __version__

__all__: list[str] = ["__version__"]
