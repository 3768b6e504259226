from .loader import SceneConfig, load_scene, loads_scene, scene_from_dict

__all__ = ["SceneConfig", "load_scene", "loads_scene", "scene_from_dict"]
