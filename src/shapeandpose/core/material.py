"""Material definitions handed to the host renderer with a mesh."""

from dataclasses import dataclass


@dataclass
class Material:
    """Rendering material properties."""
    color: tuple[float, float, float] = (0.8, 0.8, 0.8)
    opacity: float = 1.0
    shininess: float = 30.0
    double_sided: bool = False

    @staticmethod
    def from_hex(color_int: int, **kwargs) -> "Material":
        """Create material from integer hex color (e.g., 0xd4a574)."""
        r = ((color_int >> 16) & 0xFF) / 255.0
        g = ((color_int >> 8) & 0xFF) / 255.0
        b = (color_int & 0xFF) / 255.0
        return Material(color=(r, g, b), **kwargs)


# Lit skin tone used when the mesh owner has no material yet
BODY_COLOR = 0xD4A574


def default_body_material() -> Material:
    return Material.from_hex(BODY_COLOR, double_sided=True)
