"""Exceptions raised by slide-studio commands."""


class SlideStudioError(Exception):
    """Base class for every error a slide-studio command reports."""

    pass


class NotFoundError(SlideStudioError):
    """A referenced part, slide position, shape, placeholder or file does not exist."""

    pass


class PackageStructureError(SlideStudioError):
    """The working directory is not a valid unpacked presentation package."""

    pass


class AmbiguousMatchWarning(UserWarning):
    """A structural lookup matched more than one shape; the first one was used."""

    pass
