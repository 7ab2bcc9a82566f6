"""User-visible text for the import page."""

APP_NAME = "CSV Importer"

# Sidebar instructions
INSTRUCTIONS = [
    "Upload a semicolon-separated CSV file. The first row is read as the header.",
    "Each column of the file gets a drop-down above the grid. Pick the field "
    "that column should fill: First, Last, Address, ZIP or Country.",
    "Columns left on \"Ignore\" are skipped. Any number of columns can be ignored, "
    "but every other field can only be picked once.",
    "Rows where no mapped cell has a value are not imported. Press Save when done.",
]

# Notifications
FILE_REJECTED = "File rejected: {reason}"
UNABLE_TO_LOAD = "Unable to load CSV: {reason}"
LOAD_FAILED_HEADER = "Failed to import CSV file"
INVALID_STRUCTURE = "Invalid CSV structure!"
INCOMPLETE_MAPPING = "Please complete the mapping!"
NO_VALID_DATA = "No valid data to import."
SAVE_SUCCESS = "Data saved successfully!"
SAVE_FAILED = "An error occurred while saving the data: {reason}"

# Buttons
SAVE = "Save"
CLEAR_EVERYTHING = "Clear everything"
RESET_MAPPINGS = "Reset mappings"
REMOVE_GRID_DATA = "Remove grid data"
