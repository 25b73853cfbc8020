from abc import ABC, abstractmethod


class DraftingService(ABC):
    """
    Base class for text-generation backends that draft invoice messages.

    The service is opaque to the rest of the application: a prompt goes in,
    generated text comes out.
    """

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Send a text prompt to the model and return its response."""
        ...
