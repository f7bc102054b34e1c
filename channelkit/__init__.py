"""channelkit - generate YouTube channel assets with generative AI."""

__version__ = "0.1.0"
