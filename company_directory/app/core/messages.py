"""Centralised error messages exposed by the API."""

# General
INVALID_ID = "Invalid ID provided. ID must be greater than 0."
ID_MISMATCH = "The ID in the URL does not match the provided entity ID."
PAGINATION_INVALID = "Page number and page size must be greater than 0."
SEARCH_TERM_BLANK = "The search term must not be blank when provided."

# Not found
NOT_FOUND = "{entity} with ID {id} not found."
RESOURCE_NOT_FOUND = "The requested resource was not found."

# Conflicts
DUPLICATE_NAME = "An entity with the name '{value}' already exists."
DUPLICATE_EMAIL = "A worker with the email '{value}' already exists."
LINKED_WORKERS_CONFLICT = "Cannot delete a {entity} linked to {count} worker(s)."

# Field formats
INVALID_NAME_FORMAT = "Invalid value '{value}' for field '{field}'. The value must not be empty."
INVALID_EMAIL_FORMAT = "Invalid email format '{value}' for field '{field}'."
INVALID_PHONE_FORMAT = "Invalid phone number format '{value}' for field '{field}'."
INVALID_FIELD_NAME = "The following field(s) are invalid for the specified model: {fields}."
NO_FIELDS = "At least one field name must be provided."

# Transfers
TRANSFER_EMPTY = "At least one worker must be selected for the transfer."
TRANSFER_TIMEOUT = "Worker transfer exceeded its {timeout:g}s deadline after {processed} worker(s)."
