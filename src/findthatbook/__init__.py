# ABOUTME: findthatbook turns a free-text book description into a few ranked, explained matches.
# ABOUTME: Package root; holds the distribution version.

__version__ = "0.1.0"
