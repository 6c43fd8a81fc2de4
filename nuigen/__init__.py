"""nui-gen: AI-assisted generation of Nuxt-UI-style Vue components."""

__version__ = "0.1.0"
