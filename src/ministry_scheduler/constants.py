DATE_KEY_FORMAT = "%m/%d"

# Fixed order of role rows in the availability matrix
ROLE_ORDER = ("WL", "SINGER", "ACOUSTIC", "KEYBOARD", "EG", "BASS", "DRUMS")

PRAYER_LABEL = "Corporate Prayer"
PRAYER_WEEKDAY = 4  # Friday
SERVICE_WEEKDAY = 6  # Sunday

SCHEDULE_HEADER = "Schedule"
AVAILABILITY_HEADER = "Availability"
AVAILABILITY_START_ROW = 13

# Google Form question titles
FORM_NAME_HEADER = "Select your name"
FORM_TIMES_HEADER = "How many times are you willing to serve this month?"
FORM_DATES_HEADER = (
    "Which days are you NOT available? If re-submitting, please re-submit this section also"
)
FORM_COMMENTS_HEADER = "Comments(optional)"
FORM_TIMESTAMP_HEADER = "Timestamp"
FORM_RESPONSES_PREFIX = "Form Responses"

# Roster ("Ministry Members") column headers
ROSTER_NAME_HEADER = "Name"
ROSTER_ROLES_HEADER = "Roles"
ROSTER_TIMES_HEADER = "Times Willing to Serve"
ROSTER_DATES_HEADER = "Unavailable Dates"
ROSTER_COMMENTS_HEADER = "Comments"

ROSTER_SHEET_NAME = "Ministry Members"
MATRIX_NAME_TEMPLATE = "{month_name} Availability"
