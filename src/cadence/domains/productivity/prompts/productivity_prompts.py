"""MCP Prompts — pre-built interaction templates for productivity reviews."""

from __future__ import annotations

from fastmcp import FastMCP


def register_productivity_prompts(mcp: FastMCP) -> None:
    """Register productivity domain MCP prompts."""

    @mcp.prompt()
    def daily_checkin_prompt() -> str:
        """Prompt template for an end-of-day productivity check-in."""
        return """Let's check in on today. Please:

1. Score my day from my coding, exercise, calendar, sleep and step data
2. Tell me which parts of the score helped and which held it back
3. Suggest one concrete change for tomorrow

Keep it short and practical."""

    @mcp.prompt()
    def weekly_review_prompt(time_period: str = "this week") -> str:
        """Prompt template for reviewing productivity patterns over a period."""
        return f"""Let's review my productivity for {time_period}. I'd like to:

1. See my average daily score and how consistent it was
2. Know whether exercise days were more productive than rest days
3. Find my best and worst days and the overall trend
4. Get a short list of actions for next week

Please analyze my daily metrics and give me actionable insights."""
