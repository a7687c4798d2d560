"""StoryHub: short-story publishing API with moderated visitor submissions"""

__version__ = "1.0.0"
