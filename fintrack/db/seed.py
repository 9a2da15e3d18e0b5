"""
Seed data for the financial tips library.
"""

import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from fintrack.db.models import FinancialTip

logger = logging.getLogger(__name__)

TIP_CATEGORIES = ("budgeting", "saving", "investing", "debt")
TIP_DIFFICULTIES = ("beginner", "intermediate", "advanced")

FINANCIAL_TIPS: List[Dict[str, str]] = [
    # Beginner
    {
        "title": "Start with a Simple Budget",
        "content": (
            "Track all of your income and expenses for one month, from coffee to rent. "
            "Group spending into categories such as housing, food, transportation and "
            "entertainment. Knowing where money goes is the first step to controlling it."
        ),
        "category": "budgeting",
        "difficulty": "beginner",
    },
    {
        "title": "Build an Emergency Fund",
        "content": (
            "Save $1,000 for unexpected costs like car repairs or medical bills, kept in a "
            "separate account that is easy to reach but not too easy to spend. Then work "
            "toward three to six months of living expenses."
        ),
        "category": "saving",
        "difficulty": "beginner",
    },
    {
        "title": "Pay Yourself First",
        "content": (
            "Schedule an automatic transfer to savings on payday, even if it is only $25 "
            "or $50. Saving before spending makes it a habit; raise the amount as your "
            "income grows."
        ),
        "category": "saving",
        "difficulty": "beginner",
    },
    {
        "title": "Understand Needs vs. Wants",
        "content": (
            "Before a purchase, ask whether you need it or want it. Needs are food, "
            "shelter and basic clothing; wants are the latest phone or eating out. Being "
            "honest about the difference curbs impulse spending."
        ),
        "category": "budgeting",
        "difficulty": "beginner",
    },
    {
        "title": "Start Small with Debt Repayment",
        "content": (
            "List every debt with its balance and interest rate. Pay the minimum on all of "
            "them, then put extra money toward either the smallest balance for quick wins "
            "or the highest rate to save the most interest."
        ),
        "category": "debt",
        "difficulty": "beginner",
    },
    # Intermediate
    {
        "title": "Master the 50/30/20 Rule",
        "content": (
            "Put 50% of after-tax income toward needs, 30% toward wants and 20% toward "
            "savings and debt repayment. With high-interest debt, shift more into the 20%."
        ),
        "category": "budgeting",
        "difficulty": "intermediate",
    },
    {
        "title": "Invest in Your Future",
        "content": (
            "Once you have an emergency fund, contribute at least enough to a 401(k) to get "
            "the full employer match and consider a Roth IRA. Low-cost index funds and an "
            "early start let compound interest do the heavy lifting."
        ),
        "category": "investing",
        "difficulty": "intermediate",
    },
    {
        "title": "Optimize Your Credit Score",
        "content": (
            "Pay every bill on time, keep credit utilization under 30%, keep old accounts "
            "open and limit new applications. Check your credit report every year and "
            "dispute any errors."
        ),
        "category": "debt",
        "difficulty": "intermediate",
    },
    {
        "title": "Automate Your Finances",
        "content": (
            "Automate bill payments, savings transfers and investment contributions. Keep "
            "enough in checking to cover them and review your accounts monthly to catch "
            "mistakes."
        ),
        "category": "budgeting",
        "difficulty": "intermediate",
    },
    {
        "title": "Review and Adjust Regularly",
        "content": (
            "Set a monthly money date to review your budget and goals. Income, rent and "
            "expenses change, so your budget should too."
        ),
        "category": "budgeting",
        "difficulty": "intermediate",
    },
    # Advanced
    {
        "title": "Tax-Advantaged Investing Strategies",
        "content": (
            "Contribute to a 401(k) up to the match, fund a Roth IRA, then raise 401(k) "
            "contributions toward the limit. An HSA offers triple tax benefits with a "
            "high-deductible health plan."
        ),
        "category": "investing",
        "difficulty": "advanced",
    },
    {
        "title": "Asset Allocation and Rebalancing",
        "content": (
            "Spread investments across stocks, bonds and other assets according to age, "
            "risk tolerance and timeline. Rebalance once a year to return to your target "
            "allocation."
        ),
        "category": "investing",
        "difficulty": "advanced",
    },
    {
        "title": "Optimize Debt Strategically",
        "content": (
            "Low-rate debt such as a 3% mortgage can be worth keeping if investments earn "
            "more. Eliminate high-rate credit card debt aggressively and compare student "
            "loan rates with expected returns before prepaying."
        ),
        "category": "debt",
        "difficulty": "advanced",
    },
    {
        "title": "Build Multiple Income Streams",
        "content": (
            "Side businesses, freelancing, rental income and dividends reduce reliance on a "
            "single paycheck and raise your savings rate. Start with one extra stream."
        ),
        "category": "investing",
        "difficulty": "advanced",
    },
    {
        "title": "Plan for Major Life Events",
        "content": (
            "Give large future expenses such as a home down payment, children or education "
            "their own savings accounts and timelines. Keep goals under five years in "
            "conservative investments."
        ),
        "category": "saving",
        "difficulty": "advanced",
    },
]


def seed_financial_tips(db: Session) -> int:
    """
    Insert the tip library, skipping titles that already exist.

    Returns:
        Number of tips inserted
    """
    existing = {title for (title,) in db.query(FinancialTip.title).all()}
    inserted = 0

    for tip in FINANCIAL_TIPS:
        if tip["title"] in existing:
            continue
        db.add(FinancialTip(**tip))
        inserted += 1

    db.commit()
    logger.info(f"Seeded {inserted} financial tips")
    return inserted
