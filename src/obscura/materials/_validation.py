"""Parameter checks shared by the material constructors."""

from obscura.core.color import Color


def validate_color(color: Color, name: str) -> None:
    """Check that every channel of a material color is non-negative.

    Raises:
        ValueError: If any channel is negative.
    """
    for i, component in enumerate(color):
        if component < 0.0:
            raise ValueError(
                f"{name} color component {i} = {component} is negative. "
                "Material colors must have non-negative channels."
            )
