"""Building blocks for point-and-click adventure games: futures, commands, resources, animations, costumes, images, dialogs and verbs."""

__version__ = "0.1.0"

__all__ = [
    "anim",
    "command",
    "costume",
    "dialog",
    "encoding",
    "future",
    "image",
    "verbs",
]