from ghmd.rendering.renderer import DocumentRenderer, FileSection

__all__ = ['DocumentRenderer', 'FileSection']
