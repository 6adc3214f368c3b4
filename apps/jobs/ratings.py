import logging

from core.constants import MAX_RATING, MIN_RATING

logger = logging.getLogger(__name__)


def record_completion(user, rating):
    """Fold one approved job's rating into the user's running average.

    Not idempotent: callers invoke it once per job, inside the transaction
    that moves the job to ``completed``.
    """
    count = user.completed_jobs
    average = (user.rating * count + float(rating)) / (count + 1)
    user.rating = min(max(average, MIN_RATING), MAX_RATING)
    user.completed_jobs = count + 1
    user.save(update_fields=['rating', 'completed_jobs'])
    logger.info(f"User {user.pk} rated {rating}: average {user.rating:.2f} over {user.completed_jobs} jobs")
    return user
