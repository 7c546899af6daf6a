"""
Sharing feature package: Excel exports and the WhatsApp share message.
"""
