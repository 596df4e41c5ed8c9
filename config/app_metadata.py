APP_TITLE = "Toronto Coyote Incidents"

# Column names are a contract with the Airtable base; renaming one there
# leaves the field empty here.
COLUMN_ID = "ID"
COLUMN_DATE = "Date"
COLUMN_TIME = "Time"
COLUMN_LOCATION = "Location"
COLUMN_COORDINATES = "Coordinates"
COLUMN_DOG_BREED = "Dog breed"
COLUMN_DOG_WEIGHT = "Dog weight (lbs)"
COLUMN_LEASHED = "Leashed"
COLUMN_NUM_COYOTES = "Number of coyotes"
COLUMN_NOTES = "Notes"
COLUMN_DOG_INJURED = "Dog injured"
COLUMN_SOURCE = "Source"
COLUMN_PUBLISH = "Publish"
COLUMN_INCIDENT_TYPE = "Incident type"

INCIDENT_TYPES = [
    "Coyote attack on a dog (attempt)",
    "Coyote attack on a dog (successful)",
    "Stalked by a coyote",
    "Coyote attack on a human",
]

INCIDENT_COLORS = {
    "Coyote attack on a dog (attempt)": "#ef4444",
    "Coyote attack on a dog (successful)": "#b91c1c",
    "Stalked by a coyote": "#fbbf24",
    "Coyote attack on a human": "#7f1d1d",
}
DEFAULT_INCIDENT_COLOR = "#888888"

SORT_OPTIONS = {
    ("datetime", "desc"): "Most Recent",
    ("datetime", "asc"): "Oldest First",
    ("dog_breed", "asc"): "Dog Breed (A-Z)",
    ("dog_breed", "desc"): "Dog Breed (Z-A)",
    ("dog_weight_lb", "desc"): "Heaviest Dog",
    ("dog_weight_lb", "asc"): "Lightest Dog",
    ("num_coyotes", "desc"): "Most Coyotes",
    ("num_coyotes", "asc"): "Least Coyotes",
}

LEASH_OPTIONS = {
    "": "Leashed & Unleashed",
    "Yes": "Leashed Only",
    "No": "Unleashed Only",
}

INJURY_OPTIONS = {
    "": "All Incidents",
    "Yes": "Dog Injured",
    "No": "Dog Not Injured",
}

# Default map view centers on downtown Toronto.
DEFAULT_MAP_CENTER = {"lat": 43.6532, "lon": -79.3832}
DEFAULT_MAP_ZOOM = 12
SELECTED_MAP_ZOOM = 14
MAP_STYLE_LIGHT = "carto-positron"
MAP_STYLE_DARK = "carto-darkmatter"
MARKER_COLOR = "#f87171"
SELECTED_MARKER_COLOR = "#2563eb"

REPORT_INCIDENT_URL = (
    "mailto:reports@torontocoyoteconflicts.ca?subject=Coyote%20Incident"
    "&body=Hi%20I'd%20like%20to%20report%20the%20following%20incident%3A%0A%0A"
    "*%20Date%3A%20%0A*%20Time%3A%20%0A*%20Location%3A%0A"
    "*%20Incident%20type%20(coyote%20attack%20on%20dog%20-%20successful%2C%20"
    "coyote%20attack%20on%20dog%20-%20attempt%2C%20coyote%20attack%20on%20human%2C%20"
    "stalked%20by%20coyote)%3A%0A%0AIf%20involving%20a%20dog%0A"
    "*%20Dog%20injured%20(yes%20%2F%20no)%3A%0A*%20Dog%20leashed%20(yes%20%2F%20no)%3A%20%0A"
    "*%20Dog%20breed%3A%0A*%20Approx%20dog%20weight%20(lb)%3A%0A%0A"
    "Sequence%20of%20events%3A%0A%0A"
    "I%20don't%20mind%20being%20contacted%20for%20any%20followup%20questions%20(yes%20%2F%20no)%3A%20%0A%0A"
)

AIRTABLE_EDIT_URL = (
    "https://airtable.com/appWzTXQJpDAVuJNQ/tblgC4DvR3ReCyHG1/viwTUjFqDIytNkN8w?blocks=hide"
)

TABLE_STRUCTURE = [
    {"column": COLUMN_DATE, "required": True, "format": "YYYY-MM-DD", "example": "2025-02-20"},
    {"column": COLUMN_TIME, "required": True, "format": "HH:mm AM/PM (12-hour)", "example": "02:30 PM"},
    {
        "column": COLUMN_LOCATION,
        "required": True,
        "format": "Text description",
        "example": "Canoe Landing Park, City Place",
    },
    {
        "column": COLUMN_COORDINATES,
        "required": True,
        "format": '"lat, lng" format',
        "example": "43.6395, -79.3960",
    },
    {"column": COLUMN_DOG_BREED, "required": False, "format": "Text", "example": "Labrador Retriever"},
    {"column": COLUMN_DOG_WEIGHT, "required": False, "format": "Number", "example": "65"},
    {"column": COLUMN_LEASHED, "required": False, "format": '"Yes", "No", "Unknown"', "example": "Yes"},
    {"column": COLUMN_NUM_COYOTES, "required": False, "format": "Number", "example": "2"},
    {
        "column": COLUMN_NOTES,
        "required": True,
        "format": "Text (supports \\n for line breaks)",
        "example": "Terrier mix dog attacked by coyote at June Callwood Park.",
    },
    {"column": COLUMN_DOG_INJURED, "required": False, "format": '"Yes", "No", "Unknown"', "example": "No"},
    {"column": COLUMN_SOURCE, "required": False, "format": "Text", "example": "FB CityPlace Dog Owners Group"},
    {
        "column": COLUMN_PUBLISH,
        "required": True,
        "format": "Checkbox (must be checked to appear online)",
        "example": "checked",
    },
    {
        "column": COLUMN_INCIDENT_TYPE,
        "required": True,
        "format": "One of: " + ", ".join(f"'{name}'" for name in INCIDENT_TYPES),
        "example": INCIDENT_TYPES[0],
    },
]

ADDING_INCIDENT_STEPS = [
    f"Log in to [Airtable]({AIRTABLE_EDIT_URL}).",
    'Navigate to the "Toronto Coyote Incidents" table.',
    'Click the "+" button at the very bottom of the table to add a new row.',
    "Fill in the required fields, and as many of the optional fields as possible.",
    "Find latitude and longitude from Google Maps by right clicking the location; "
    "tap the coordinates to copy them.",
    'Double-check coordinates (should be in "lat, lng" format).',
    'To have it show on the map, make sure "Publish" is checked and all required '
    "columns are filled in.",
]

DATA_QUALITY_GUIDELINES = [
    "Ensure dates are in YYYY-MM-DD format.",
    "Use 12-hour time format with AM / PM (HH:mm AM/PM), e.g. 12:00 PM.",
    "Updating column names will break the app.",
]
