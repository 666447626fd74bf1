from __future__ import annotations

import argparse
import json
import sys
import uuid
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from sipcalc.core.config import SETTINGS
from sipcalc.tools.sip_tools import report_from_payload, yearly_breakdown_frame
from sipcalc.utils.logging import get_logger, set_log_context, set_operation, setup_logging
from sipcalc.utils.sip_engine import compare_scenarios, deflate, simulate, solve_goal, summarize_projection
from sipcalc.utils.sip_models import GoalPlan, InvestmentPlan
from sipcalc.utils.validation_models import ValidationReport
from sipcalc.utils.validators import inspect_goal, inspect_projection, inspect_report, inspect_scenarios

logger = get_logger("sip_cli")


def _print_report(rep: ValidationReport, file=None) -> None:
    for e in rep.errors:
        print(f"ERROR: {e.message} ({e.location or ''})", file=file)
    for w in rep.warnings:
        print(f"WARN: {w.message} ({w.location or ''})", file=file)


def _plan_from_args(args: argparse.Namespace) -> InvestmentPlan:
    rate = SETTINGS.default_return_rate_pct if args.rate is None else args.rate
    step_up = SETTINGS.default_step_up_pct if args.step_up is None else args.step_up
    return InvestmentPlan(
        monthly_contribution=args.monthly,
        duration_years=args.years,
        annual_return_rate_pct=rate,
        step_up_enabled=args.step_up is not None,
        step_up_pct=step_up,
        lump_sum=args.lump_sum,
    )


def cmd_project(args: argparse.Namespace) -> int:
    plan = _plan_from_args(args)
    result = simulate(plan)
    rep = inspect_projection(result)

    if args.json:
        print(result.model_dump_json(indent=2))
        return 0 if rep.ok else 2

    inflation = SETTINGS.default_inflation_rate_pct if args.inflation is None else args.inflation
    metrics = summarize_projection(result, plan.duration_years, inflation)
    print(f"Monthly investment: {result.monthly_investment:.2f}")
    print(f"Total invested:     {result.total_investment:.0f}")
    print(f"Maturity amount:    {result.maturity_amount:.0f}")
    print(f"Total gains:        {result.total_gains:.0f}")
    print(f"Total returns:      {metrics.total_returns_pct:.1f}%")
    print(f"Real value (today): {metrics.real_maturity_amount:.0f} at {inflation:g}% inflation")
    if result.yearly_breakdown:
        print()
        print(yearly_breakdown_frame(result).to_string(index=False))
    _print_report(rep)
    return 0 if rep.ok else 2


def cmd_goal(args: argparse.Namespace) -> int:
    rate = SETTINGS.default_return_rate_pct if args.rate is None else args.rate
    goal = solve_goal(
        GoalPlan(
            target_amount=args.target,
            duration_years=args.years,
            annual_return_rate_pct=rate,
            current_contribution=args.current,
        )
    )
    rep = inspect_goal(goal)

    if args.json:
        print(goal.model_dump_json(indent=2))
    else:
        print(f"Target amount:        {goal.target_amount:.0f}")
        print(f"Required monthly SIP: {goal.required_contribution:.0f}")
        print(f"Monthly shortfall:    {goal.shortfall:.0f}")
        print(f"Goal progress:        {goal.progress_pct:.1f}%")
        _print_report(rep)
    return 0 if rep.ok else 2


def cmd_scenarios(args: argparse.Namespace) -> int:
    out = compare_scenarios(args.monthly, args.years, SETTINGS.scenario_rates)
    rep = inspect_scenarios(out)

    if args.json:
        print(out.model_dump_json(indent=2))
    else:
        for o in out.outcomes:
            print(f"{o.label} - {o.annual_rate_pct:g}%: maturity={o.maturity_amount:.0f} gains={o.gains:.0f}")
        _print_report(rep)
    return 0 if rep.ok else 2


def cmd_deflate(args: argparse.Namespace) -> int:
    inflation = SETTINGS.default_inflation_rate_pct if args.inflation is None else args.inflation
    real = deflate(args.amount, inflation, args.years)
    if args.json:
        print(json.dumps({"nominal_amount": args.amount, "inflation_rate_pct": inflation, "years": args.years, "real_value": real}))
    else:
        print(f"{args.amount:.2f} in {args.years:g} years = {real:.2f} today ({inflation:g}% inflation)")
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    payload = json.loads(Path(args.payload).read_text(encoding="utf-8"))
    report = report_from_payload(payload)
    rep = inspect_report(report)

    print(json.dumps(report.model_dump(mode="json"), indent=2))
    # stdout stays pure JSON
    _print_report(rep, file=sys.stderr)
    return 0 if rep.ok else 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sip_cli", description="SIP projection and goal planning")
    p.add_argument("--log_level", default=None)
    sub = p.add_subparsers(dest="cmd", required=True)

    pr = sub.add_parser("project", help="Month-by-month SIP projection")
    pr.add_argument("--monthly", type=float, required=True)
    pr.add_argument("--years", type=int, required=True)
    pr.add_argument("--rate", type=float, default=None, help="annual return %%")
    pr.add_argument("--step_up", type=float, default=None, help="annual step-up %%; enables step-up")
    pr.add_argument("--lump_sum", type=float, default=0.0)
    pr.add_argument("--inflation", type=float, default=None)
    pr.add_argument("--json", action="store_true")
    pr.set_defaults(func=cmd_project)

    g = sub.add_parser("goal", help="Required monthly SIP for a target")
    g.add_argument("--target", type=float, required=True)
    g.add_argument("--years", type=int, required=True)
    g.add_argument("--rate", type=float, default=None)
    g.add_argument("--current", type=float, default=0.0)
    g.add_argument("--json", action="store_true")
    g.set_defaults(func=cmd_goal)

    s = sub.add_parser("scenarios", help="Compare configured return rates")
    s.add_argument("--monthly", type=float, required=True)
    s.add_argument("--years", type=int, required=True)
    s.add_argument("--json", action="store_true")
    s.set_defaults(func=cmd_scenarios)

    d = sub.add_parser("deflate", help="Nominal amount in today's money")
    d.add_argument("--amount", type=float, required=True)
    d.add_argument("--years", type=float, required=True)
    d.add_argument("--inflation", type=float, default=None)
    d.add_argument("--json", action="store_true")
    d.set_defaults(func=cmd_deflate)

    r = sub.add_parser("report", help="Build the full report bundle from a JSON payload file")
    r.add_argument("--payload", required=True)
    r.set_defaults(func=cmd_report)

    return p


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or SETTINGS.log_level)
    set_log_context(request_id=str(uuid.uuid4()))
    set_operation(args.cmd)

    try:
        rc = args.func(args)
    except ValidationError as e:
        logger.warning("invalid input cmd=%s errors=%s", args.cmd, e.error_count())
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1
    logger.info("done cmd=%s rc=%s", args.cmd, rc)
    return rc


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
