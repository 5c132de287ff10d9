"""Core tilecraft components: tiles, registry, resolver and layout."""
