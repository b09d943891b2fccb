"""
Example usage of waybackprobe library.

This file demonstrates how to use the waybackprobe library to:
1. Find the earliest and latest Wayback Machine captures of a URL
2. Read capture dates from Wayback URLs
3. Submit a URL to the Internet Archive's save-now endpoint
"""

import json
import logging

from waybackprobe import (
    SaveError,
    WaybackError,
    get_wayback_data,
    human_date,
    submit_to_internet_archive,
)


def example_get_wayback_data():
    """Example: Find captures of the BBC news page"""
    print("=" * 70)
    print("waybackprobe - Example: Finding captures of bbc.co.uk/news")
    print("=" * 70)

    try:
        record = get_wayback_data("http://www.bbc.co.uk/news")

        print(f"\nURL:         {record.url}")
        print(f"Outcome:     {record.outcome.value}")
        print(f"Response:    {record.response_code} {record.response_text}")
        print(f"Save URL:    {record.save_url}")

        if record.not_in_archive:
            print("\nNo captures yet. Submit the save URL to create one.")
            return

        print("\n" + "-" * 70)
        print("Captures:")
        print("-" * 70)
        print(f"  Earliest [{human_date(record.earliest_capture_url or '')}]: {record.earliest_capture_url}")
        print(f"  Latest   [{human_date(record.latest_capture_url or '')}]: {record.latest_capture_url}")

        print("\n" + "=" * 70)
        print("Full JSON Output:")
        print("=" * 70)
        print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))

    except WaybackError as e:
        print(f"\nError: {e}")


def example_already_archived():
    """Example: Archive links are recognised without touching the network"""
    print("\n" + "=" * 70)
    print("waybackprobe - Example: Passing a Wayback URL")
    print("=" * 70)

    link = "http://web.archive.org/web/19961221203254/http://www0.bbc.co.uk:80/"
    record = get_wayback_data(link)
    print(f"\nAlready archived: {record.already_archived} ({record.reason})")
    print(f"Captured on:      {human_date(link)}")


def example_save_now():
    """Example: Submit a page to save-now"""
    print("\n" + "=" * 70)
    print("waybackprobe - Example: Save-now submission")
    print("=" * 70)

    try:
        result = submit_to_internet_archive("http://www.bbc.co.uk/news")
        print(f"\nSubmitted:   {result.save_url}")
        print(f"Status:      {result.status_code} {result.status_text}")
        print(f"New capture: {result.capture_url}")
    except SaveError as e:
        print(f"\nArchive refused the capture: {e}")
    except WaybackError as e:
        print(f"\nError: {e}")


def main():
    """Run all examples"""
    logging.basicConfig(level=logging.INFO)
    example_get_wayback_data()
    example_already_archived()
    # example_save_now()


if __name__ == "__main__":
    main()
