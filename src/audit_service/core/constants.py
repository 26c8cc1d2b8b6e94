# Exams with k at or below this value are judged against the class;
# above it each student is judged against their own evaluations.
REDUNDANCY_THRESHOLD = 3

FLAGGED_TICKET_MESSAGE = "Flagged via statistics"
RUN_SUCCESS_MESSAGE = "Evaluations Flagged Successfully"

MARKS_SEPARATOR = ";"
