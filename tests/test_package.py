import importlib
import pkgutil

import pledger


def test_all_lists_every_submodule() -> None:
    """``__all__`` names each module shipped in the package, and each imports."""
    shipped = sorted(m.name for m in pkgutil.iter_modules(pledger.__path__))
    assert sorted(pledger.__all__) == shipped
    for name in pledger.__all__:
        assert importlib.import_module(f"pledger.{name}")
