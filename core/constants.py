# core/constants.py
JOB_STATUS_CHOICES = (
    ('open', 'Open'),                      # Initial state, accepting an assignee
    ('in_progress', 'In Progress'),        # Assigned and being worked on
    ('pending_review', 'Pending Review'),  # Assignee asked the creator to sign off
    ('completed', 'Completed'),            # Creator approved the work
    ('cancelled', 'Cancelled'),            # Withdrawn for good
    ('expired', 'Expired'),                # Passed expires_at before finishing
)

JOB_CATEGORY_CHOICES = (
    ('Delivery', 'Delivery'),
    ('Shopping', 'Shopping'),
    ('Cleaning', 'Cleaning'),
    ('Moving', 'Moving'),
    ('Assembly', 'Assembly'),
    ('Other', 'Other'),
)

# Expiry never overrides these
TERMINAL_JOB_STATUSES = frozenset({'completed', 'cancelled'})

# A job in one of these always has an assignee
ASSIGNED_JOB_STATUSES = frozenset({'in_progress', 'pending_review', 'completed'})

MIN_RATING = 0
MAX_RATING = 5
