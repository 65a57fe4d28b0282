"""Delete every calendar event with a given title around today."""
import argparse
import logging
import sys

from googleapiclient.errors import HttpError

from pomocal.api.auth import AuthManager
from pomocal.api.calendar import CalendarManager
from pomocal.core.config import CONFIG_DIR
from pomocal.core.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('title', help="exact event title to delete")
    parser.add_argument('--years', type=int, default=1, help="search this many years before and after today")
    return parser.parse_args(argv)


def cleanup(calendar_manager, title, years=1):
    """Delete matching events one by one and return how many were removed."""
    try:
        events = calendar_manager.find_events_matching(title, years=years)
    except (HttpError, OSError) as e:
        logger.error("Failed to search events titled %s: %s", title, e)
        print(f"Could not search the calendar: {e}")
        return 0
    print(f"Found {len(events)} events.")
    deleted = 0
    for event in events:
        try:
            calendar_manager._delete(event)
        except (HttpError, OSError) as e:
            logger.error("Failed to delete event %s: %s", event.get('id'), e)
            continue
        print(f"Deleted event: {event.get('summary', '')} ({event.get('start', {}).get('dateTime', '')})")
        deleted += 1
    if deleted:
        calendar_manager._refresh()
    return deleted


def main(argv=None):
    args = parse_args(argv)
    setup_logging(CONFIG_DIR)

    calendar_manager = CalendarManager(AuthManager())
    if not calendar_manager.has_access:
        print("Calendar access denied. Run the app and grant access first.")
        return 1

    deleted = cleanup(calendar_manager, args.title, years=args.years)
    print(f"Deleted {deleted} events.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
