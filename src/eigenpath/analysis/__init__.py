from .contact import WallContact, compute_contact, detect_contacts, resolve_normal_direction, CONTACT_TOLERANCE
from .scene import SceneEntry, assemble_scene, wall_contact_counts

__all__ = [
    "WallContact", "compute_contact", "detect_contacts", "resolve_normal_direction", "CONTACT_TOLERANCE",
    "SceneEntry", "assemble_scene", "wall_contact_counts",
]
