from .stream_resolution import StreamResolutionUseCase
from .title_info import TitleInfoUseCase

__all__ = ["StreamResolutionUseCase", "TitleInfoUseCase"]
