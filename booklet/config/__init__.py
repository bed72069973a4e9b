from .loader import load_config
from .models import (
    BookletConfig,
    BrowserConfig,
    ConversionJob,
    RenderOptions,
)

__all__ = [
    "BookletConfig",
    "BrowserConfig",
    "ConversionJob",
    "RenderOptions",
    "load_config",
]
