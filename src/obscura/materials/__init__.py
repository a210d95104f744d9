"""Surface materials: Lambertian, Metallic and Dielectric scattering."""

from obscura.materials.dielectric import Dielectric
from obscura.materials.lambertian import Lambertian
from obscura.materials.material import Material, scatter
from obscura.materials.metallic import Metallic

__all__ = ["Dielectric", "Lambertian", "Material", "Metallic", "scatter"]
