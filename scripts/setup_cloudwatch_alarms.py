from __future__ import annotations

import argparse
from typing import List, Optional

import boto3


def _alarm_name(prefix: str, name: str) -> str:
    return f"{prefix}-{name}"


def _alarm_actions(topic_arn: Optional[str]) -> list[str]:
    if not topic_arn:
        return []
    return [topic_arn]


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Create CloudWatch alarms for the pricing API")
    parser.add_argument("--alarm-prefix", default="pricing-core", help="Alarm name prefix")
    parser.add_argument(
        "--namespace",
        default="PricingCore",
        help="CloudWatch namespace for custom metrics",
    )
    parser.add_argument("--sns-topic-arn", help="SNS topic ARN for alarm actions")
    parser.add_argument(
        "--rejected-threshold",
        type=int,
        default=50,
        help="Rejected quote count threshold",
    )
    parser.add_argument(
        "--rejected-period",
        type=int,
        default=300,
        help="Period in seconds for the rejected quote alarm",
    )
    parser.add_argument(
        "--rejected-evaluation-periods",
        type=int,
        default=1,
        help="Evaluation periods for the rejected quote alarm",
    )
    parser.add_argument(
        "--error-code",
        action="append",
        default=[],
        help="Also alarm on one error_code dimension (repeatable), e.g. unsupported_strategy",
    )

    args = parser.parse_args(argv)

    cloudwatch = boto3.client("cloudwatch")
    alarm_actions = _alarm_actions(args.sns_topic_arn)

    for error_code in args.error_code:
        cloudwatch.put_metric_alarm(
            AlarmName=_alarm_name(args.alarm_prefix, f"rejected-{error_code}"),
            AlarmDescription=f"Triggers when quotes are rejected with {error_code}.",
            Namespace=args.namespace,
            MetricName="QuoteRejected",
            Dimensions=[{"Name": "error_code", "Value": error_code}],
            Statistic="Sum",
            Period=args.rejected_period,
            EvaluationPeriods=args.rejected_evaluation_periods,
            DatapointsToAlarm=args.rejected_evaluation_periods,
            Threshold=args.rejected_threshold,
            ComparisonOperator="GreaterThanOrEqualToThreshold",
            TreatMissingData="notBreaching",
            AlarmActions=alarm_actions,
            OKActions=alarm_actions,
        )

    cloudwatch.put_metric_alarm(
        AlarmName=_alarm_name(args.alarm_prefix, "quote-rejections"),
        AlarmDescription="Triggers on an elevated rate of rejected quotes.",
        Namespace=args.namespace,
        MetricName="QuoteRejected",
        Dimensions=[],
        Statistic="Sum",
        Period=args.rejected_period,
        EvaluationPeriods=args.rejected_evaluation_periods,
        DatapointsToAlarm=args.rejected_evaluation_periods,
        Threshold=args.rejected_threshold,
        ComparisonOperator="GreaterThanOrEqualToThreshold",
        TreatMissingData="notBreaching",
        AlarmActions=alarm_actions,
        OKActions=alarm_actions,
    )


if __name__ == "__main__":
    main()
