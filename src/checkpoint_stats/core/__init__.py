"""Transport, retry and error primitives."""

__all__: list[str] = []
