from ghmd.execution.mapper import map_bounded

__all__ = ['map_bounded']
