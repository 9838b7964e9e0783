from src.hooks.frame_hooks import FrameHookManager
from src.hooks.viewer_scanner import ViewerScanner, iter_icons

__all__ = ["FrameHookManager", "ViewerScanner", "iter_icons"]
