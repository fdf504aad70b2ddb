from userinfo_pages.config import AppConfig, load_app_config
from userinfo_pages.templates import (
    PageTemplates,
    TemplateLoadError,
    load_page_templates,
    load_template,
)

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "PageTemplates",
    "TemplateLoadError",
    "__version__",
    "load_app_config",
    "load_page_templates",
    "load_template",
]
