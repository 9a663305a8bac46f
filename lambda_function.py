"""AWS Lambda handler for the yoga calendar sync."""
import json
import logging
import os
import time
from typing import Dict, Any

import boto3

from processor.calendar_merger import CalendarMerger
from processor.calendar_pipeline import CalendarPipeline
from processor.event_filter import EventFilter
from processor.exceptions import CalendarSyncError
from processor.ical_codec import ICalendarCodec
from scraper.calendar_feed import CalendarFeedFetcher
from storage.s3_manager import S3Manager

# Attributes present on every LogRecord; anything else came from `extra`
_RESERVED_ATTRS = set(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {'message'}


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON, including any extra fields."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def build_pipeline(config: Dict[str, Any]) -> CalendarPipeline:
    """
    Wire up the pipeline and its AWS/HTTP clients.

    Args:
        config: Settings read by ``load_config``

    Returns:
        Ready-to-run CalendarPipeline
    """
    s3_client = boto3.client('s3', region_name=config['region'])

    return CalendarPipeline(
        storage=S3Manager(bucket=config['bucket_name'], client=s3_client),
        fetcher=CalendarFeedFetcher(timeout=config['timeout_seconds']),
        codec=ICalendarCodec(),
        event_filter=EventFilter(keyword=config['event_keyword']),
        merger=CalendarMerger(calendar_name=config['calendar_name']),
        locations_key=config['locations_data_key'],
        calendar_folder=config['calendar_folder_key']
    )


def load_config() -> Dict[str, Any]:
    """Read handler settings from environment variables."""
    return {
        'region': os.environ.get('AWS_REGION'),
        'bucket_name': os.environ.get('BUCKET_NAME', 'trc-yoga'),
        'locations_data_key': os.environ.get('LOCATIONS_DATA_KEY', 'locations.json'),
        'calendar_folder_key': os.environ.get('CALENDAR_FOLDER_KEY', 'calendars'),
        'event_keyword': os.environ.get('EVENT_KEYWORD', EventFilter.DEFAULT_KEYWORD),
        'calendar_name': os.environ.get('CALENDAR_NAME', CalendarMerger.DEFAULT_CALENDAR_NAME),
        'timeout_seconds': int(os.environ.get('TIMEOUT_SECONDS', '30')),
        'log_level': os.environ.get('LOG_LEVEL', 'INFO')
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler function for the calendar sync.

    Args:
        event: EventBridge event payload
        context: Lambda context object

    Returns:
        Response dict with statusCode and summary statistics
    """
    config = load_config()

    setup_logging(config['log_level'])
    logger = logging.getLogger(__name__)

    start_time = time.time()
    logger.info(
        "Lambda execution started",
        extra={
            'bucket_name': config['bucket_name'],
            'locations_data_key': config['locations_data_key'],
            'calendar_folder_key': config['calendar_folder_key']
        }
    )

    try:
        pipeline = build_pipeline(config)
        result = pipeline.run()

    except CalendarSyncError as e:
        duration = time.time() - start_time
        logger.error(
            f"Calendar sync failed: {str(e)}",
            extra={'error_type': type(e).__name__},
            exc_info=True
        )
        return {
            'statusCode': 500,
            'body': json.dumps({
                'message': 'Failed to generate calendar files',
                'error': str(e),
                'error_type': type(e).__name__,
                'note': 'Calendar files written before the failure remain in place',
                'duration_seconds': round(duration, 2)
            })
        }

    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            f"Lambda execution failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )
        return {
            'statusCode': 500,
            'body': json.dumps({
                'message': 'Sync failed',
                'error': str(e),
                'error_type': type(e).__name__,
                'duration_seconds': round(duration, 2)
            })
        }

    duration = time.time() - start_time
    logger.info(
        "Generated calendar files successfully",
        extra={
            'duration_seconds': round(duration, 2),
            'locations_loaded': result.locations_loaded,
            'calendars_written': len(result.calendars_written)
        }
    )

    return {
        'statusCode': 200,
        'body': json.dumps({
            'message': 'Generated calendar files successfully',
            'statistics': {
                'locations_loaded': result.locations_loaded,
                'events_by_location': result.events_by_location,
                'calendars_written': len(result.calendars_written),
                'duration_seconds': round(duration, 2)
            },
            'calendar_keys': result.calendars_written
        })
    }
