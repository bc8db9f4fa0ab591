"""crudgen -- CRUD scaffold generator driven by entity metadata."""

__version__ = "0.1.0"
