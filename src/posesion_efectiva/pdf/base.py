"""
Form-writing capability and the document-level error taxonomy.
"""

from abc import ABC, abstractmethod


class FormFieldWriter(ABC):
    """
    Abstract capability for writing values into a fillable form.

    Lookups never raise: a name the template does not contain is reported
    as not found and the caller decides whether to log or count it.
    """

    @abstractmethod
    def try_set_text(self, name: str, value: str) -> bool:
        """
        Set a text field.

        Args:
            name: Fully qualified field name (e.g. "RUT HEREDERO.8.0")
            value: Text to write

        Returns:
            True if the field exists in the template, False otherwise
        """
        pass

    @abstractmethod
    def try_set_checkbox(self, name: str, checked: bool) -> bool:
        """
        Check or uncheck a checkbox.

        Returns:
            True if the checkbox exists in the template, False otherwise
        """
        pass

    @abstractmethod
    def flatten(self) -> None:
        """Bake every field value into static page content."""
        pass


class FormFillingError(Exception):
    """Exception raised when a document-level operation fails."""

    def __init__(self, message: str, operation: str = "generar PDF", details: str | None = None):
        self.message = message
        self.operation = operation
        self.details = details or message
        super().__init__(self.message)


class TemplateError(FormFillingError):
    """The form template could not be read or parsed."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message, operation="cargar plantilla", details=details)


class DocumentAssemblyError(FormFillingError):
    """Flattening, page copying, merging or serialization failed."""
