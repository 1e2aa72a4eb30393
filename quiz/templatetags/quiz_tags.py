"""
Vlastní template tagy pro stránky kvízů.
"""
from django import template

from accounts.roles import user_is_admin

register = template.Library()


@register.filter
def is_admin(user):
    """
    Template filter pro kontrolu, zda je uživatel administrátor webu.

    Použití: {% if user|is_admin %}
    """
    return user_is_admin(user)


@register.filter
def get_item(dictionary, key):
    """
    Template filter pro přístup ke slovníku pomocí proměnného klíče.

    Použití: {{ my_dict|get_item:key_name }}
    """
    if dictionary is None:
        return None
    return dictionary.get(key)


@register.filter
def option_letter(index):
    """0 -> "A", 1 -> "B" ..."""
    return chr(ord("A") + int(index))
