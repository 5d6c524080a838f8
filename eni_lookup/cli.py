"""Command-line lookups of network interfaces and instances."""

import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional

from eni_lookup.client import EniClient
from eni_lookup.config import load_settings
from eni_lookup.errors import ConfigurationError, EniLookupError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='eni-lookup',
        description='Look up EC2 network interfaces and the instances they are attached to'
    )
    parser.add_argument(
        '--region',
        help='AWS region (default: AWS_REGION / AWS_DEFAULT_REGION)'
    )
    parser.add_argument(
        '--account',
        help='Account to read from through the cross-account role'
    )
    parser.add_argument(
        '--role',
        help='Cross-account role name (default: IAM_CROSS_ACCOUNT_ROLE)'
    )
    parser.add_argument(
        '--output',
        help='Write JSON results to this file instead of stdout'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    enis = subparsers.add_parser('enis', help='Describe network interfaces (all when no ids are given)')
    enis.add_argument('eni_ids', nargs='*', metavar='ENI_ID')

    instances = subparsers.add_parser('instances', help='Describe instances')
    instances.add_argument('instance_ids', nargs='+', metavar='INSTANCE_ID')

    return parser


def main(argv: Optional[List[str]] = None, client: Optional[EniClient] = None) -> int:
    """Main function for local execution."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logging.basicConfig(format='%(asctime)s - %(levelname)s - %(message)s')
        logger.error(f"Invalid configuration: {e}")
        return 1

    settings = replace(
        settings,
        region=args.region or settings.region,
        account=args.account or settings.account,
        role_name=args.role or settings.role_name,
    )

    log_level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        client = client or EniClient.from_settings(settings)

        if args.command == 'enis':
            # No ids on the command line means every interface
            enis = client.describe_enis(args.eni_ids or None)
            results = [eni.to_dict() for eni in enis]
            key = 'network_interfaces'
            attached = sum(1 for eni in enis if eni.attached_instance is not None)
            logger.info(f"Resolved {len(enis)} network interfaces, {attached} attached to instances")
        else:
            instances = client.describe_instances_by_ids(args.instance_ids)
            results = [instance.to_dict() for instance in instances]
            key = 'instances'
            logger.info(f"Resolved {len(instances)} of {len(args.instance_ids)} instances")

    except EniLookupError as e:
        logger.error(f"Lookup failed: {e}")
        return 1

    output_data = {
        'metadata': {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'region': settings.region,
            'count': len(results),
        },
        key: results,
    }

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(output_data, f, indent=2, default=str)
        logger.info(f"Results saved to {args.output}")
    else:
        json.dump(output_data, sys.stdout, indent=2, default=str)
        sys.stdout.write('\n')

    return 0


if __name__ == '__main__':
    sys.exit(main())
