"""Plain-text renderers for CLI output."""

from __future__ import annotations

from typing import Any, Dict, List


def render_folder_tree(domain: str, folders: List[Dict[str, Any]]) -> str:
    """Render folder groups (and their topics) as an ASCII tree.

    Args:
        domain: Root label.
        folders: ``FolderGroup.to_dict()`` payloads.
    """
    lines = [f"🌐 {domain}"]
    count = len(folders)
    for i, folder in enumerate(folders):
        is_last = i == count - 1
        connector = "└── " if is_last else "├── "
        lines.append(f"{connector}📁 {folder['folder']} ({folder['count']})")

        child_prefix = "    " if is_last else "│   "
        topics = folder.get("topics") or []
        for j, topic in enumerate(topics):
            topic_connector = "└── " if j == len(topics) - 1 else "├── "
            lines.append(f"{child_prefix}{topic_connector}{topic['name']} (~{topic['count']})")
    return "\n".join(lines)


def render_topic_summary(result: Dict[str, Any]) -> str:
    """Summarise a topic-analysis payload: counts, topics, outliers."""
    lines = [
        f"Domain            : {result['domain']}",
        f"URLs discovered   : {result['total_urls']}",
        f"URLs kept         : {result['valid_urls']}",
        f"URLs w/ keywords  : {result['urls_with_keywords']}",
    ]
    topics = result.get("topics") or []
    if not topics:
        lines.append("No main topics were found for this site.")
        return "\n".join(lines)

    lines.append("")
    for topic in topics:
        lines.append(f"■ {topic['name']} — {topic['count']} page(s)")
        if topic.get("description"):
            lines.append(f"    {topic['description']}")
        for item in topic["urls"]:
            lines.append(f"    • {item['url']}")
    lines.append("")
    lines.append(f"Outliers ({result.get('outlier_count', 0)}):")
    for item in result.get("outliers", []):
        lines.append(f"    • {item['url']}")
    return "\n".join(lines)


def render_ratio_summary(result: Dict[str, Any]) -> str:
    lines = [
        f"Domain   : {result['domain']}",
        f"Total    : {result['totalUrls']} page(s)",
        f"Blog     : {result['blogUrls']} ({result['blogPercentage']}%)",
        f"Website  : {result['websiteUrls']} ({result['websitePercentage']}%)",
    ]
    blog_topics = result.get("blogTopics") or []
    if blog_topics:
        lines.append("Blog topics: " + ", ".join(f"{t['name']} (~{t['count']})" for t in blog_topics))
    return "\n".join(lines)
