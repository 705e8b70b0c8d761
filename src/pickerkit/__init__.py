"""pickerkit — temporal input engine for date and time pickers."""

__version__ = "0.1.0"
