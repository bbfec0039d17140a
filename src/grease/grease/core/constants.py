"""Constants and defaults.

Note: Keep permission and event type names here so call sites never spell them ad hoc.
"""

OWN_SECTION_SUFFIX = "-own-section"

# Event permissions (may be granted per event type)
CREATE_EVENT = "create-event"
MODIFY_EVENT = "modify-event"
DELETE_EVENT = "delete-event"
EDIT_ATTENDANCE = "edit-attendance"
EDIT_ATTENDANCE_OWN_SECTION = EDIT_ATTENDANCE + OWN_SECTION_SUFFIX
VIEW_ATTENDANCE = "view-attendance"
VIEW_ATTENDANCE_OWN_SECTION = VIEW_ATTENDANCE + OWN_SECTION_SUFFIX
EDIT_CARPOOL = "edit-carpool"
EDIT_SETLIST = "edit-setlist"

# Static permissions
EDIT_ALL_EVENTS = "edit-all-events"
PROCESS_ABSENCE_REQUESTS = "process-absence-requests"
PROCESS_GIG_REQUESTS = "process-gig-requests"
EDIT_PERMISSIONS = "edit-permissions"
ADD_MULTI_TODOS = "add-multi-todos"

EVENT_PERMISSIONS = (
    CREATE_EVENT,
    MODIFY_EVENT,
    DELETE_EVENT,
    EDIT_ATTENDANCE,
    EDIT_ATTENDANCE_OWN_SECTION,
    VIEW_ATTENDANCE,
    VIEW_ATTENDANCE_OWN_SECTION,
    EDIT_CARPOOL,
    EDIT_SETLIST,
)

STATIC_PERMISSIONS = (
    EDIT_ALL_EVENTS,
    PROCESS_ABSENCE_REQUESTS,
    PROCESS_GIG_REQUESTS,
    EDIT_PERMISSIONS,
    ADD_MULTI_TODOS,
)

DEFAULT_EVENT_TYPES = (
    "Rehearsal",
    "Sectional",
    "Tutti Gig",
    "Volunteer Gig",
    "Ombuds",
    "Other",
)

DEFAULT_SECTIONS = ("Baritone", "Bass", "Tenor 1", "Tenor 2")

DEFAULT_SESSION_DAYS = 7
