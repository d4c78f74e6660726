"""AWS Route 53 zone provider implementation."""

import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from dnspair.errors import ProviderError
from dnspair.providers.dns.base import ZoneProvider
from dnspair.sync.models import AliasTarget, Change, Record, RecordPage, Zone

logger = logging.getLogger(__name__)


class Route53Provider(ZoneProvider):
    """Zone provider for AWS Route 53."""

    def __init__(
        self,
        profile: str | None = None,
        region: str = "us-east-1",
    ):
        """Initialize Route 53 provider.

        Args:
            profile: AWS shared-config profile (default credentials chain if None)
            region: AWS region for the session (Route 53 itself is global)
        """
        config = Config(retries={"max_attempts": 3, "mode": "standard"})

        session = boto3.Session(profile_name=profile, region_name=region)
        self.client = session.client("route53", config=config)

    def list_zones_by_name(self, name: str, max_items: int = 1) -> Zone | None:
        """Return the first hosted zone at or after ``name``."""
        try:
            response = self.client.list_hosted_zones_by_name(
                DNSName=name, MaxItems=str(max_items)
            )
        except (BotoCoreError, ClientError) as e:
            raise ProviderError("ListHostedZonesByName", str(e)) from e

        zones = response.get("HostedZones", [])
        if not zones:
            return None

        zone = zones[0]
        # Route 53 returns ids as "/hostedzone/ABC123"
        return Zone(id=zone["Id"].split("/")[-1], name=zone["Name"])

    def list_record_sets(
        self,
        zone_id: str,
        start_name: str | None = None,
        start_type: str | None = None,
        max_items: int | None = None,
    ) -> RecordPage:
        """List one page of record sets."""
        params: dict[str, Any] = {"HostedZoneId": zone_id}
        if start_name is not None:
            params["StartRecordName"] = start_name
            if start_type is not None:
                params["StartRecordType"] = start_type
        if max_items is not None:
            params["MaxItems"] = str(max_items)

        try:
            response = self.client.list_resource_record_sets(**params)
        except (BotoCoreError, ClientError) as e:
            raise ProviderError("ListResourceRecordSets", str(e)) from e

        return RecordPage(
            records=[_to_record(rrset) for rrset in response.get("ResourceRecordSets", [])],
            truncated=response.get("IsTruncated", False),
            next_name=response.get("NextRecordName"),
            next_type=response.get("NextRecordType"),
        )

    def change_record_sets(self, zone_id: str, changes: list[Change]) -> str:
        """Submit a change batch and return its change id."""
        try:
            response = self.client.change_resource_record_sets(
                HostedZoneId=zone_id,
                ChangeBatch={"Changes": [_to_change(change) for change in changes]},
            )
        except (BotoCoreError, ClientError) as e:
            raise ProviderError("ChangeResourceRecordSets", str(e)) from e

        change_id = response["ChangeInfo"]["Id"]
        logger.debug("Submitted change %s to zone %s", change_id, zone_id)
        return change_id

    def wait_for_change(self, change_id: str) -> None:
        """Block on the resource_record_sets_changed waiter."""
        waiter = self.client.get_waiter("resource_record_sets_changed")
        try:
            waiter.wait(Id=change_id)
        except (BotoCoreError, ClientError) as e:
            raise ProviderError("GetChange", str(e)) from e


def _to_record(rrset: dict[str, Any]) -> Record:
    """Convert a Route 53 record set to a Record, keeping every value."""
    alias = rrset.get("AliasTarget")
    alias_target = None
    if alias is not None:
        alias_target = AliasTarget(
            hosted_zone_id=alias["HostedZoneId"],
            dns_name=alias["DNSName"],
            evaluate_target_health=alias.get("EvaluateTargetHealth", False),
        )

    return Record(
        name=rrset["Name"],
        type=rrset["Type"],
        values=tuple(rr["Value"] for rr in rrset.get("ResourceRecords", [])),
        ttl=rrset.get("TTL"),
        alias_target=alias_target,
    )


def _to_change(change: Change) -> dict[str, Any]:
    """Convert a Change to the Route 53 shape ``_to_record`` reads."""
    record = change.record
    rrset: dict[str, Any] = {"Name": record.name, "Type": record.type}

    if record.alias_target is not None:
        rrset["AliasTarget"] = {
            "HostedZoneId": record.alias_target.hosted_zone_id,
            "DNSName": record.alias_target.dns_name,
            "EvaluateTargetHealth": record.alias_target.evaluate_target_health,
        }
    else:
        rrset["TTL"] = record.ttl
        rrset["ResourceRecords"] = [{"Value": value} for value in record.values]

    return {"Action": change.action.value, "ResourceRecordSet": rrset}
