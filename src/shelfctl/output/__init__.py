"""Output layer — render ServiceResult as Rich text or JSON.

Output may import from services (for the ServiceResult type) but never
from commands.
"""
