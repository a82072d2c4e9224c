"""Keyword-matched advisory templates used when no remote model is involved.

Rules are evaluated in declaration order and the first match wins. Topics
overlap (``mortgage`` is both a debt and a home-buying marker), so the order
of ``TOPIC_RULES`` is the priority list.
"""

from __future__ import annotations

from typing import NamedTuple, Optional, Tuple


MIN_MESSAGE_LENGTH = 5

GREETING_MARKERS = ("hi", "hello", "hey")

GREETING_RESPONSE = (
    "Hello! I'm FinanceGuru, your personal finance assistant. I can help you with "
    "budgeting, investing, debt management, and achieving your financial goals. "
    "How can I assist you today?"
)

FALLBACK_RESPONSE = (
    "I'm here to help with your personal finance questions. Please provide more "
    "details or ask about specific topics like budgeting, investing, debt "
    "management, or financial planning."
)


class TopicRule(NamedTuple):
    topic: str
    markers: Tuple[str, ...]
    response: str

    def matches(self, text: str) -> bool:
        return any(marker in text for marker in self.markers)


TOPIC_RULES: Tuple[TopicRule, ...] = (
    TopicRule(
        "budget",
        ("budget", "spending", "expenses", "track"),
        "Creating a solid budget is the foundation of financial success! Here's how to get started:\n\n"
        "1. Track all income and expenses for at least a month\n"
        "2. Categorize your spending (housing, food, transportation, etc.)\n"
        "3. Identify areas to reduce expenses\n"
        "4. Set realistic spending limits for each category\n"
        "5. Review and adjust your budget regularly to stay on track.",
    ),
    TopicRule(
        "saving",
        ("save", "saving", "emergency fund", "emergency"),
        "Building savings is critical for financial security. Here's my advice:\n\n"
        "1. Start with an emergency fund covering 3-6 months of essential expenses\n"
        "2. Keep your emergency fund in a high-yield savings account\n"
        "3. Automate your savings to make it easier\n"
        "4. Set specific savings goals (e.g., vacation, home down payment)\n"
        "5. Review and adjust your savings plan regularly.",
    ),
    TopicRule(
        "debt",
        ("debt", "loan", "credit card", "mortgage", "student loan"),
        "Managing debt effectively is crucial for your financial health. Here's a step-by-step approach:\n\n"
        "1. List all debts with their interest rates, minimum payments, and balances\n"
        "2. Consider the debt avalanche (highest interest rate first) or debt snowball "
        "(smallest balance first) method\n"
        "3. Make extra payments towards the chosen debt while maintaining minimum payments on others\n"
        "4. Avoid taking on new debt while paying off existing debt\n"
        "5. Consider consolidating high-interest debts to lower your overall interest rate.",
    ),
    TopicRule(
        "investing",
        ("invest", "stock", "bond", "retirement", "401k", "ira"),
        "Investing is how you build wealth long-term. Here are key principles to get started:\n\n"
        "1. Before investing, ensure you have an emergency fund and have addressed high-interest debt\n"
        "2. Diversify your investments to spread risk\n"
        "3. Consider low-cost index funds or ETFs\n"
        "4. Invest consistently over time, regardless of market conditions\n"
        "5. Review and adjust your investment portfolio periodically.",
    ),
    TopicRule(
        "home_buying",
        ("house", "home", "mortgage", "property", "real estate"),
        "Buying a home is one of the biggest financial decisions you'll make. Here's guidance:\n\n"
        "1. Save for a down payment of at least 20% to avoid PMI (private mortgage insurance)\n"
        "2. Get pre-approved for a mortgage to understand your budget\n"
        "3. Consider the total cost of homeownership (maintenance, property taxes, insurance)\n"
        "4. Work with a reputable real estate agent\n"
        "5. Have the property inspected before finalizing the purchase.",
    ),
    TopicRule(
        "credit_score",
        ("credit score", "credit report", "credit history", "fico"),
        "Your credit score has a huge impact on your financial options. Here's how to maintain a healthy score:\n\n"
        "1. Pay all bills on time - payment history is 35% of your FICO score\n"
        "2. Keep credit card balances low relative to credit limits\n"
        "3. Avoid opening new credit accounts frequently\n"
        "4. Check your credit report regularly for errors\n"
        "5. Maintain a mix of credit types (credit cards, installment loans, etc.).",
    ),
    TopicRule(
        "tax",
        ("tax", "taxes", "deduction", "write-off", "irs"),
        "Tax planning can save you significant money. Consider these strategies:\n\n"
        "1. Maximize tax-advantaged accounts like 401(k)s, IRAs, and HSAs\n"
        "2. Keep track of deductible expenses throughout the year\n"
        "3. Consider tax loss harvesting to offset capital gains\n"
        "4. Stay informed about tax law changes\n"
        "5. Consult a tax professional for personalized advice.",
    ),
    TopicRule(
        "retirement",
        ("retire", "retirement", "401k", "ira", "pension"),
        "Planning for retirement is essential for long-term financial security. Here's how to prepare:\n\n"
        "1. Start saving as early as possible to benefit from compound growth\n"
        "2. Aim to save 15% of your income for retirement\n"
        "3. Take advantage of employer-sponsored retirement plans and matching contributions\n"
        "4. Diversify your retirement investments\n"
        "5. Review and adjust your retirement plan regularly.",
    ),
    TopicRule(
        "insurance",
        ("insurance", "insure", "coverage", "policy", "premium"),
        "Insurance protects your financial future from catastrophic events. Here are key types to consider:\n\n"
        "1. Health insurance - Essential for everyone to avoid medical bankruptcy\n"
        "2. Auto insurance - Required in most states and protects against vehicle-related damages\n"
        "3. Homeowners or renters insurance - Protects your property and belongings\n"
        "4. Life insurance - Provides financial support for your dependents\n"
        "5. Disability insurance - Replaces a portion of your income if you're unable to work.",
    ),
    TopicRule(
        "financial_independence",
        ("financial independence", "early retirement", "fire movement", "financial freedom"),
        "The FIRE (Financial Independence, Retire Early) movement focuses on aggressive saving and "
        "investing to achieve financial freedom sooner. Core principles include:\n\n"
        "1. Increase your savings rate by reducing expenses and increasing income\n"
        "2. Invest in a diversified portfolio to grow your wealth\n"
        "3. Aim to save at least 50% of your income\n"
        "4. Track your progress towards financial independence\n"
        "5. Plan for sustainable withdrawal rates during early retirement.",
    ),
    TopicRule(
        "student_loans",
        ("student loan", "college debt", "education loan", "student debt"),
        "Managing student loan debt requires a strategic approach:\n\n"
        "1. Know your loans - federal vs private, interest rates, terms\n"
        "2. Explore repayment options for federal loans (income-driven repayment, public service "
        "loan forgiveness)\n"
        "3. Consider refinancing private loans to lower interest rates\n"
        "4. Make extra payments towards high-interest loans\n"
        "5. Stay informed about changes in student loan policies.",
    ),
    TopicRule(
        "side_income",
        ("side hustle", "extra income", "passive income", "earn more"),
        "Increasing your income can accelerate your financial goals. Consider these options:\n\n"
        "1. Freelancing in your professional field\n"
        "2. Sharing economy (Uber, Airbnb, etc.)\n"
        "3. Online marketplaces (Etsy, eBay, etc.)\n"
        "4. Part-time or seasonal jobs\n"
        "5. Creating passive income streams (investment income, rental properties, etc.).",
    ),
    TopicRule(
        "financial_planning",
        ("plan", "goals", "financial plan", "roadmap"),
        "Creating a personal financial plan is essential for achieving your goals. Here's how to get started:\n\n"
        "1. Define your financial goals (short-term, medium-term, and long-term)\n"
        "2. Assess your current financial situation (income, expenses, assets, liabilities)\n"
        "3. Create a budget to manage your cash flow\n"
        "4. Develop a savings and investment strategy\n"
        "5. Monitor your progress and adjust your plan as needed.",
    ),
    TopicRule(
        "crypto",
        ("crypto", "bitcoin", "ethereum", "blockchain", "nft"),
        "Cryptocurrencies are highly volatile investments that should only be considered as a small "
        "portion of a well-diversified portfolio. Here's what to know:\n\n"
        "1. Only invest money you can afford to lose\n"
        "2. Research and understand the technology and market\n"
        "3. Be aware of security risks and store your assets safely\n"
        "4. Monitor regulations and legal considerations\n"
        "5. Diversify within the crypto market to spread risk.",
    ),
    TopicRule(
        "economy",
        ("inflation", "recession", "economy", "economic"),
        "Economic conditions like inflation and recessions affect your financial planning. "
        "Here are strategies to consider:\n\n"
        "1. Maintain a diversified investment portfolio\n"
        "2. Keep an emergency fund for unexpected expenses\n"
        "3. Focus on reducing high-interest debt\n"
        "4. Consider inflation-protected securities (e.g., TIPS)\n"
        "5. Stay informed about economic trends and adjust your financial plan accordingly.",
    ),
)


def is_greeting(text: str) -> bool:
    return len(text) < MIN_MESSAGE_LENGTH or any(m in text for m in GREETING_MARKERS)


def match_topic(message: str) -> Optional[TopicRule]:
    """First rule whose markers appear in ``message``, or None."""

    text = message.lower()
    for rule in TOPIC_RULES:
        if rule.matches(text):
            return rule
    return None


def respond_locally(message: str) -> str:
    text = message.lower()
    if is_greeting(text):
        return GREETING_RESPONSE
    rule = match_topic(text)
    return rule.response if rule else FALLBACK_RESPONSE
