"""onchain-event-handler - Safe multisig events to Discord."""
__version__ = "0.1.0"
