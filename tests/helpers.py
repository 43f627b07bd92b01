"""Synthetic draw histories on the 1st and 16th of each month."""
from lotto2d.scraper import records_to_frame


def draw_ids(n, start_year_be=2560):
    """n draw ids oldest first, two draws per month (1st and 16th)."""
    ids = []
    year, month, day = start_year_be, 1, 1
    while len(ids) < n:
        ids.append(f"{day:02d}{month:02d}{year:04d}")
        if day == 1:
            day = 16
        else:
            day = 1
            month += 1
            if month > 12:
                month, year = 1, year + 1
    return ids


def make_history(outcomes_oldest_first, start_year_be=2560):
    """Newest-first history frame from a chronological list of outcomes."""
    ids = draw_ids(len(outcomes_oldest_first), start_year_be)
    return records_to_frame(
        {"id": i, "last2": f"{o:02d}"} for i, o in zip(ids, outcomes_oldest_first)
    )
