"""
Main Execution Script for the Resource Availability Resolver.
Loads (or generates) one resource's week and exceptions, resolves the
report window, prints the summary and exports the timeline.
"""

import os
import sys
import json
import logging
from datetime import date, timedelta

from pydantic import ValidationError

# Add current directory to path so imports work
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

import config
from availability import AvailabilityResolver, ExceptionConflictError, JsonFileRepository
from availability.timeline import build_timeline, total_cost
from generators.data_factory import DataGenerator

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger("Main")


def load_repository(path) -> JsonFileRepository:
    """Open the data file, starting over from an empty store if it is unreadable."""
    try:
        return JsonFileRepository(path)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"⚠️ Data file {path} is invalid ({e}). Starting from an empty store.")
        os.replace(path, f"{path}.corrupt")
        return JsonFileRepository(path)


def seed_resource(repo: JsonFileRepository, resource_id: str, start_date: date) -> None:
    """Store the default week and sample exceptions for a resource with no data."""
    generator = DataGenerator(currency=config.CURRENCY, hourly_rate=config.DEFAULT_HOURLY_RATE)
    patterns, exceptions = generator.generate_resource(int(resource_id), start_date)

    repo.save_weekly_patterns(resource_id, patterns)
    for exception in exceptions:
        try:
            repo.persist_exception(exception)
        except ExceptionConflictError as e:
            logger.warning(f"Skipping sample exception: {e}")


def export_timeline(timeline, summary, filename) -> None:
    """Serializes the resolved window into JSON for a frontend."""
    logger.info(f"💾 Exporting timeline to {filename}...")
    data = {
        "summary": summary.model_dump(mode='json'),
        "total_cost": str(total_cost(timeline)),
        "timeline": [day.model_dump(mode='json') for day in timeline],
    }
    with open(filename, 'w') as f:
        json.dump(data, f, indent=2)
    logger.info("✅ Timeline exported.")


def main():
    start_date = date.today()
    end_date = start_date + timedelta(days=config.REPORT_DAYS - 1)
    resource_id = config.RESOURCE_ID

    # --- PHASE 1: DATA ACQUISITION (Stored vs. Generated) ---
    repo = load_repository(config.DATA_FILE)
    if not repo.has_resource(resource_id):
        logger.info(f"No stored data for resource {resource_id}, generating defaults")
        seed_resource(repo, resource_id, start_date)

    patterns = repo.load_weekly_patterns(resource_id)
    exceptions = repo.load_active_exceptions(resource_id, start_date, end_date)
    logger.info(f"📋 Resource {resource_id}: {len(patterns)} patterns, {len(exceptions)} active exceptions in window")

    # --- PHASE 2: RESOLUTION ---
    resolver = AvailabilityResolver(patterns, exceptions)
    summary = resolver.summarize(start_date, end_date)
    timeline = build_timeline(resolver, start_date, end_date)

    # --- PHASE 3: REPORTING ---
    print("\n" + "=" * 50)
    print(f"📊 AVAILABILITY REPORT {start_date} .. {end_date}")
    print("=" * 50)
    print(f"Total Days:        {summary.total_days}")
    print(f"Working Days:      {summary.working_days}")
    print(f"Total Hours:       {summary.total_hours}")
    print(f"Exceptions:        {summary.exceptions_count}")
    print(f"Avg Hours/Workday: {summary.average_hours_per_working_day:.2f}")
    print(f"Total Cost:        {total_cost(timeline):.2f} {config.CURRENCY}")

    print("\n📅 DAILY BREAKDOWN")
    for day in timeline:
        marker = "✅" if day.is_working_day else "❌"
        note = f"  ({day.notes})" if day.notes else ""
        print(f"{marker} {day.date}  {day.hours_available:>5}h  {day.source.value}{note}")

    # --- PHASE 4: EXPORT FOR FRONTEND ---
    export_timeline(timeline, summary, config.EXPORT_FILE)


if __name__ == "__main__":
    main()
