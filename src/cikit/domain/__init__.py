"""Pure domain rules: platforms, build info, image names, coverage profiles.

Nothing in this package touches the filesystem or spawns processes.
"""
