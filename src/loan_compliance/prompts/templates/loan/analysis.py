"""Personal-loan compliance analysis prompt templates.

Prompts are stored in ``_PROMPT_DATA`` and read by the prompt registry.
"""

from __future__ import annotations

_PROMPT_DATA: dict[str, str] = {
    "SECTION_LINE": "Page {page_number}: {content}",
    "ANALYSIS_PROMPT": """Analyze this personal loan document for regulatory compliance:

Document: {filename}
Total Pages: {total_pages}

Content to analyze (each section is truncated to its first {section_max_chars} characters):
{sections}

Analyze for compliance with:
1. TILA (Truth in Lending Act)
2. ESIGN Act
3. UDAAP (Unfair, Deceptive, or Abusive Acts or Practices)
4. ECOA (Equal Credit Opportunity Act)

For each issue found, provide:
- Severity (high/medium/low)
- Category (TILA/ESIGN/UDAAP/ECOA)
- Description of the issue
- Specific regulation reference
- Suggested fix
- Location (page number and relevant text)

Format the response as JSON matching this structure:
{{
  "issues": [{{
    "severity": "high|medium|low",
    "category": "TILA|ESIGN|UDAAP|ECOA",
    "description": "string",
    "regulation_reference": "string",
    "suggested_fix": "string",
    "location": {{
      "pageNumber": number,
      "section": "string",
      "excerpt": "string"
    }}
  }}]
}}

If no issues are found, return {{"issues": []}}.""",
}
