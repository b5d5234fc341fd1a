# src/pr_reviewer/errors.py


class ReviewPipelineError(Exception):
    """Base class for errors raised by the review pipeline."""


class FetchError(ReviewPipelineError):
    """The provider did not return a usable list of changed files."""


class ModelInvocationError(ReviewPipelineError):
    """The local model process could not be run."""


class ModelTimeoutError(ModelInvocationError):
    """The local model process did not finish in time and was killed."""


class MissingCredentialError(ReviewPipelineError):
    """A provider call that needs a token was attempted without one."""


class CommentPostError(ReviewPipelineError):
    """The provider could not be reached or sent an unreadable reply."""
