from django import template

from announcements.rendering import render_text

register = template.Library()


@register.filter
def announcement_html(text):
    """Escaped text with <br> line breaks and clickable links."""
    return render_text(text)
