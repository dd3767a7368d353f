"""Grid ray-casting maze viewer for .cub scene files: parser, ray caster, renderer and game loop."""

__version__ = "0.1.0"