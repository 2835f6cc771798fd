from src.core.config import Settings, get_settings
