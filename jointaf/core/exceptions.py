#!/usr/bin/env python

"""Custom exceptions raised by jointaf."""


class JointAFError(Exception):
    """Raise a custom exception that will report with traceback.

    This is used to catch and report internal errors in the code,
    and the traceback will include the source error and error type
    for debugging.
    """
    def __init__(self, *args, **kwargs):
        Exception.__init__(self, *args, **kwargs)


class PriorConfigurationError(JointAFError):
    """Raised when the heterozygosity leaves no mass for AF=0."""


class SiteContextError(JointAFError, ValueError):
    """Raised when a site's reference base or likelihoods are malformed."""
