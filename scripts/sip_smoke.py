from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sipcalc.tools.sip_tools import (
    tool_build_report, tool_compare_scenarios, tool_deflate, tool_simulate, tool_solve_goal,
    yearly_breakdown_frame,
)

def main():
    plan = {
        "monthlyAmount": 5000,
        "duration": 10,
        "expectedReturn": 12,
        "stepUpEnabled": True,
        "stepUpPercentage": 10,
        "lumpSumAmount": 100000,
    }
    proj = tool_simulate(plan)
    print("Total invested:", proj["total_investment"])
    print("Maturity amount:", proj["maturity_amount"])
    print("Total gains:", proj["total_gains"])
    print(yearly_breakdown_frame(proj).to_string(index=False))

    goal = tool_solve_goal({"targetAmount": 1000000, "duration": 10, "expectedReturn": 12, "monthlyAmount": 5000})
    print("Required monthly SIP:", goal["required_contribution"])
    print("Shortfall:", goal["shortfall"])
    print("Goal progress %:", goal["progress_pct"])

    sc = tool_compare_scenarios({"monthlyAmount": 5000, "duration": 10})
    for s in sc["outcomes"]:
        print("Scenario:", s["label"], s["annual_rate_pct"], s["maturity_amount"], s["gains"])

    real = tool_deflate({"nominal_amount": proj["maturity_amount"], "inflationRate": 6, "years": 10})
    print("Real value today:", round(real["real_value"]))

    report = tool_build_report({
        "plan": plan,
        "goal": {"targetAmount": 1000000},
        "advisor": {"name": "A. Advisor", "phone": "9876543210", "address": "12 MG Road"},
        "client": {"name": "C. Client", "phone": "9123456780", "email": "client@example.com", "goals": ["Retirement Planning"]},
        "currentAge": 25,
        "retirementAge": 60,
    })
    print("Report sections:", sorted(report.keys()))

if __name__ == "__main__":
    main()
