# src/joindata/plugins/hookspecs.py
"""pluggy hook specifications for joindata stage plugins.

Plugins implement these hooks to contribute stage classes. The stage
manager calls them when its caches are refreshed.

Usage (implementing a plugin):
    from joindata.plugins.hookspecs import hookimpl

    class UppercaseKeysPlugin:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def joindata_get_stages(self):
            return [UppercaseValidator]

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks plugin implementations of those hooks.
"""

import pluggy

# Project name for pluggy (also the setuptools entry point group)
PROJECT_NAME = "joindata"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class JoinDataStageSpec:
    """Hook specifications for stage plugins."""

    @hookspec
    def joindata_get_stages(self) -> list[type]:  # type: ignore[empty-body]
        """Return stage classes (not instances).

        Each class must define ``kind`` (one of STAGE_KINDS) and ``name``.
        """
