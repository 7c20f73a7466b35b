from .config_loader import ConfigLoader, get_section

__all__ = ["ConfigLoader", "get_section"]
