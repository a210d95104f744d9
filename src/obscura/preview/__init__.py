"""PNG export and Matplotlib display of captured images."""

from obscura.preview.export import film_to_uint8, save_png, unpack_buffer

__all__ = ["film_to_uint8", "save_png", "unpack_buffer"]
