"""Prompt templates for summaries, research and cartoons."""

from ..config import ContentType

_GLOSSARY_EXAMPLE = """📖 *Glossary*
• *Token* = a small chunk of text; models generate text one token at a time
• *MoE* = Mixture of Experts, a model architecture with specialized sub-networks"""

_RESPONSE_FORMAT = """Format your response EXACTLY like this (use --- as separator):
[haiku line 1]
[haiku line 2]
[haiku line 3]

[one-liner]
---
[eli5]"""

SUMMARY_PROMPTS = {
    ContentType.TECHNICAL: f"""Give me three things for this technical article:

1. A HAIKU (5-7-5 syllables) that captures the essence. Be evocative and rich - make it feel like poetry, not a summary. Clever wordplay welcome. Aim for something memorable.

2. A ONE-LINER - the "why this matters" hook. Can be a spicy take if warranted, but doesn't have to be. Should be grounded in something real and valid. Direct, confident, makes you want to read more.

3. An ELI5 - explain this to a smart non-technical friend. You have stylistic freedom: prose, bullets, emojis, whatever makes it clearest. Length should match the content - brief for simple stuff, longer for rich/complex topics. Use **bold** sparingly and only for key concepts or terms (not random words for emphasis). Optimize for readability and accurate understanding.

If you use any technical terms that need defining, add a glossary at the very end. Format it like this example:
{_GLOSSARY_EXAMPLE}
Only include glossary if actually needed - skip if everything is already clear.

{_RESPONSE_FORMAT}""",
    ContentType.ANNOUNCEMENT: f"""Give me three things for this announcement:

1. A HAIKU (5-7-5 syllables) that captures the moment. Be evocative, not corporate. Make it feel like poetry - something you'd remember.

2. A ONE-LINER - cut through the PR. What's the real story here? Can be spicy if warranted, but ground it in truth. Direct and confident.

3. An ELI5 - what does this mean for regular people or the industry? You have stylistic freedom: prose, bullets, emojis, whatever makes it clearest. Length should match the content - brief for simple stuff, longer for complex announcements. Use **bold** sparingly and only for key concepts or terms (not random words for emphasis). No hype, just clarity.

If you use any jargon that needs explaining, add a glossary at the very end. Format it like this example:
{_GLOSSARY_EXAMPLE}
Only include glossary if actually needed.

{_RESPONSE_FORMAT}""",
}

_RESEARCH_STYLE = """Dig deep - follow your own threads, verify claims, chase interesting angles. Keep the final output scannable: use emoji markers (📢 🔍 ⚙️ 🤔 💡 etc.) to start each bullet point. 3-5 bullets total, conversational and brief."""

_RESEARCH_CLOSING = """If this is very recent and no reactions exist yet, say so honestly. Include source links where relevant (markdown format). End with a "Bottom line:" hot take - a punchy, opinionated final sentence. Don't offer to "dig deeper" - this is a report, not a chat."""

# Phrases swapped out when research falls back to a call without web search.
RESEARCH_SEARCH_PHRASES = {
    ContentType.TECHNICAL: "Search the web for context",
    ContentType.ANNOUNCEMENT: "Search the web to verify claims and provide context",
}

NO_SEARCH_PHRASE = "Based on what you know, provide context"

RESEARCH_PROMPTS = {
    ContentType.TECHNICAL: f"""You're giving a friend the quick backstory on this article. Search the web for context.

Consider angles like (pick what's relevant):
- What's the buzz? Reactions, tweets, HN comments?
- How does this compare to what others are doing?
- Technical deep-dive: If the tech is novel, what's the underlying approach and why does it matter?
- Any skepticism or counterpoints worth noting?
- Contrarian/counter-intuitive: What's surprising, or challenges the obvious narrative?

{_RESEARCH_STYLE} Skip the academic tone. {_RESEARCH_CLOSING}""",
    ContentType.ANNOUNCEMENT: f"""You're giving a friend the real talk on this announcement. Search the web to verify claims and provide context.

Consider angles like (pick what's relevant):
- Hype check: Is this genuinely new or do competitors already have this?
- What's the reaction? Excited, skeptical, meh? Quote sources if you find them.
- The real signal: What does this move indicate about their strategy?
- Contrarian/counter-intuitive: What's surprising, glossed over, or challenges the obvious narrative?

{_RESEARCH_STYLE} Be honest and grounded. If you can't verify something, say so. {_RESEARCH_CLOSING}""",
}

CARTOON_SCRIPT_INSTRUCTIONS = """You are a comic strip writer for a tech newsletter. Your job is to create a 4-panel cartoon script that explains a key insight from a tech article in a memorable, visual way.

Your script must follow this EXACT format:

STYLE: [One of: "xkcd minimalist" | "the oatmeal" | "dilbert office" | "calvin and hobbes"]
CHARACTER: [Brief consistent character description, e.g., "A stick figure programmer with spiky hair and glasses"]

PANEL 1 (Setup): [Detailed visual scene description - establish the situation]
PANEL 2 (Problem): [Detailed visual scene description - introduce tension or confusion]
PANEL 3 (Realization): [Detailed visual scene description - the "aha" moment]
PANEL 4 (Punchline): [Detailed visual scene description - the insight or funny conclusion]

Guidelines:
- Each panel description should be 1-2 sentences, visually specific
- Focus on ONE key insight from the article - don't try to explain everything
- Make it clever, witty, or thought-provoking
- Use visual metaphors when possible (e.g., "a tower of blocks wobbling" for instability)
- Keep characters consistent across all panels
- Avoid text-heavy panels - show don't tell
- The punchline should land with impact

If you need to search for additional context about the topic, you may do so."""


def build_summary_prompt(content: str, title: str, content_type: ContentType, max_chars: int) -> str:
    """Summary prompt with the article appended."""
    return f"""{SUMMARY_PROMPTS[ContentType(content_type)]}

Article Title: {title}

Article Content:
{content[:max_chars]}"""


def build_research_prompt(content: str, title: str, content_type: ContentType, max_chars: int) -> str:
    """Web-search research prompt."""
    return f"""{RESEARCH_PROMPTS[ContentType(content_type)]}

Article Title: "{title}"

Article Content (excerpt):
{content[:max_chars]}

Search the web for context and provide your research findings:"""


def build_fallback_research_prompt(
    content: str, title: str, content_type: ContentType, max_chars: int
) -> str:
    """Research prompt with the search instruction stripped."""
    content_type = ContentType(content_type)
    prompt = RESEARCH_PROMPTS[content_type].replace(
        RESEARCH_SEARCH_PHRASES[content_type], NO_SEARCH_PHRASE
    )
    return f"""{prompt}

(Note: No web search - use your training knowledge)

Article Title: "{title}"

Article Content (excerpt):
{content[:max_chars]}"""


def build_cartoon_script_prompt(haiku: str, title: str, excerpt: str, max_chars: int) -> str:
    """User prompt for the cartoon script step."""
    return f"""Create a 4-panel cartoon script for this tech article:

Article Title: "{title}"

Haiku Summary:
{haiku}

Article Excerpt:
{excerpt[:max_chars]}

Remember to output in the exact format specified (STYLE, CHARACTER, PANEL 1-4)."""
