"""Prompt templates for the semantic labeling service."""

from __future__ import annotations

TOPIC_NAMING_PROMPT = """\
Analyze these URL slugs from a website section and identify the top {top_n} content themes/topics.
Group similar content together and return concise, human-readable topic names (2-4 words max).
Estimate how many of the slugs belong to each topic.

URL slugs:
{slug_lines}

Total URLs in this section: {total}

Return JSON with this exact structure:
{{
  "topics": [
    {{ "name": "Topic Name", "count": number_of_articles }}
  ]
}}

Rules:
- Return at most {top_n} topics
- Topic names should be concise and descriptive (e.g., "Virtual Backgrounds", "Webinar Software")
- Count should be your estimate of how many URLs belong to that topic
- Only include topics that have at least {min_count} related URLs
- IMPORTANT: Detect the language of the URL slugs and return topic names in that SAME language"""


CLASSIFICATION_PROMPT = """\
You are classifying website URLs into topic categories.

Main Topics:
{topic_lines}

Task: Classify each URL below into ONE of the topics above (use exact topic name), or mark as "outlier" if it doesn't fit any topic.

URLs to classify:
{batch_json}

Return a JSON object with this structure:
{{
  "results": [
    {{ "url": "full URL here", "topic": "exact topic name or 'outlier'" }}
  ]
}}"""


SITE_TOPICS_PROMPT = (
    "Analyze this website homepage and identify the top 5 main benefit areas, "
    "topic categories, or sections that this website offers. These should be "
    "high-level themes"
)

SITE_TOPICS_SCHEMA = {
    "type": "object",
    "properties": {
        "topics": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Topic name (2-5 words)"},
                    "description": {
                        "type": "string",
                        "description": "Brief description of this topic area",
                    },
                },
                "required": ["name", "description"],
            },
            "description": "Top 5 main benefit areas or topic categories of this website",
        },
    },
    "required": ["topics"],
}
