"""Text blocks used to render player feedback into synthesis guidance."""

FEEDBACK_GUIDANCE_HEADER = """
LEARNED FROM PLAYER FEEDBACK:
Players reported the claim pairs below as bad. Avoid patterns like these:
"""

FEEDBACK_GUIDANCE_ITEM = """{index}. (Reported {times_reported}x)
   TRUE: {true_claim}
   FALSE: {false_claim}"""
