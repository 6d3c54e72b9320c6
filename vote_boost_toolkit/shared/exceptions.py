"""
Exception hierarchy for the vote boost toolkit.

Exception Categories:
- RetryableException: Transient failures that may succeed if the caller
  re-runs the evaluation (RPC, block index service)
- NonRetryableException: Permanent failures that won't benefit from a re-run
- ConfigurationException: Invalid options or environment, raised before any
  network activity

The strategy itself never retries. Every exception propagates to the caller
and no partial weight mapping is ever returned.
"""


class RetryableException(Exception):
    """
    Base class for exceptions that may succeed on a later run.

    Use for transient failures like:
    - RPC timeouts
    - Rate limiting on the block index service
    - Temporary network issues
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NonRetryableException(Exception):
    """
    Base class for exceptions that won't benefit from a re-run.

    Use for permanent failures like:
    - Invalid strategy options
    - Business limit violations (too many samples, too many whitelisted)
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationException(NonRetryableException):
    """
    Exception for configuration errors.

    Use when:
    - Sample count or whitelist size exceeds the protocol cap
    - Required option fields are missing or malformed
    - RPC URL for a chain is not configured
    """

    pass


class ExternalLookupException(RetryableException):
    """
    Exception for failed lookups against external collaborators.

    Raised when the block index service has no block for a timestamp,
    answers with an error, or when the provider cannot return a block
    or the chain head.
    """

    pass


class BatchReadException(RetryableException):
    """
    Exception for failed batched reads.

    Raised when a multicall fails or reverts on either chain. The whole
    evaluation is aborted.
    """

    pass
