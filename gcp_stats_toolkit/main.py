"""
Command line entry point for the GCP stats toolkit

  copy       copy one Spanner query statistics view into BigQuery
  placement  print the project, zone, region and service account in use
"""

import argparse
import sys
from typing import List, Optional

from google.cloud import bigquery, spanner

from .config import PipelineConfig
from .metadata import select_resolver
from .pipeline import QueryStatsCopyService
from .spanner import Granularity
from .utils import get_logger, setup_logging

logger = get_logger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Spanner query statistics to BigQuery copier',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s copy --instance my-instance --database my-db --granularity minute
           --dataset spanner_stats --table query_stats
  %(prog)s placement
        """
    )
    subparsers = parser.add_subparsers(dest='command', required=True)
    
    copy_parser = subparsers.add_parser('copy', help='Copy a query statistics view into BigQuery')
    copy_parser.add_argument('--instance', required=True, help='Spanner instance id')
    copy_parser.add_argument('--database', required=True, help='Spanner database id')
    copy_parser.add_argument('--granularity', required=True,
                             choices=[g.value for g in Granularity],
                             help='Aggregation window of the source view')
    copy_parser.add_argument('--dataset', required=True, help='Destination BigQuery dataset')
    copy_parser.add_argument('--table', required=True, help='Destination BigQuery table')
    copy_parser.add_argument('--project', help='Spanner project (resolved from placement if omitted)')
    copy_parser.add_argument('--dataset_project', help='Destination dataset project (defaults to --project)')
    
    subparsers.add_parser('placement', help='Print resolved placement values')
    
    return parser.parse_args(argv)


def run_copy(args: argparse.Namespace, config: PipelineConfig) -> None:
    project = args.project or resolve_project(config)
    dataset_project = args.dataset_project or project
    logger.info(f"Spanner: projects/{project}/instances/{args.instance}/databases/{args.database}")
    
    database = spanner.Client(project=project).instance(args.instance).database(args.database)
    bq_client = bigquery.Client(project=dataset_project)
    
    service = QueryStatsCopyService(database, bq_client, config)
    service.copy(
        Granularity.parse(args.granularity),
        bigquery.DatasetReference(dataset_project, args.dataset),
        args.table
    )


def resolve_project(config: PipelineConfig) -> str:
    resolver = select_resolver(config)
    try:
        return resolver.project_id()
    finally:
        resolver.close()


def run_placement(config: PipelineConfig) -> None:
    resolver = select_resolver(config)
    try:
        managed = resolver.is_managed_environment()
        info = resolver.placement()
    finally:
        resolver.close()
    print(f"managed: {managed}")
    for name, value in vars(info).items():
        print(f"{name}: {value}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_arguments(argv)
    config = PipelineConfig.from_env()
    setup_logging(config)
    
    try:
        if args.command == 'copy':
            run_copy(args, config)
        else:
            run_placement(config)
    except Exception as e:
        print(f"{args.command} failed: {str(e)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
