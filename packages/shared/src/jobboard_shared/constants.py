"""Storage keys and user-facing message constants.

These constants are the single source of truth for the strings that leave the
library: storage keys persisted on the user's machine and the messages callers
show to end users. The request pipeline, the error classifier, and the session
manager all reference these instead of repeating literals.
"""

# Durable storage keys. The token is the only key required for correctness;
# the user copy is a denormalized cache for display.
TOKEN_KEY = "job_portal_token"
USER_KEY = "job_portal_user"

# Roles and statuses as the backend spells them
ROLE_SEEKER = "SEEKER"
ROLE_EMPLOYER = "EMPLOYER"
ROLE_ADMIN = "ADMIN"

JOB_STATUSES = ("PENDING", "ACTIVE", "INACTIVE")
APPLICATION_STATUSES = ("PENDING", "ACCEPTED", "REJECTED")

UNKNOWN_EMPLOYER = "Unknown Employer"

# Error messages keyed by the classified failure they describe
ERROR_MESSAGES = {
    "NETWORK_ERROR": "Network error. Please check your connection and try again.",
    "TIMEOUT": "The request timed out. Please try again.",
    "TOKEN_EXPIRED": "Your session has expired. Please log in again.",
    "FORBIDDEN": "You do not have permission to perform this action.",
    "NOT_FOUND": "The requested resource was not found.",
    "CONFLICT": "A conflict occurred. This item may already exist.",
    "VALIDATION_ERROR": "Please check your input and try again.",
    "RATE_LIMITED": "Too many requests. Please try again later.",
    "SERVER_ERROR": "A server error occurred. Please try again later.",
    "UNEXPECTED": "An unexpected error occurred.",
    "UNKNOWN": "An unexpected error occurred. Please try again.",
    "ALREADY_APPLIED": "You have already applied to this job.",
    "NO_ACCESS_TOKEN": "No access token received",
    "INVALID_TOKEN": "Invalid token received",
}

SUCCESS_MESSAGES = {
    "LOGIN": "Login successful!",
    "REGISTER": "Registration successful! Please check your email to verify your account.",
    "PASSWORD_RESET_EMAIL": "Password reset email sent successfully!",
    "VERIFICATION_EMAIL": "Verification email sent successfully!",
    "JOB_CREATED": "Job created successfully!",
    "JOB_UPDATED": "Job updated successfully!",
    "JOB_DELETED": "Job deleted successfully!",
    "JOB_STATUS_UPDATED": "Job status updated successfully!",
    "APPLICATION_SUBMITTED": "Application submitted successfully!",
    "APPLICATION_UPDATED": "Application status updated successfully!",
}
