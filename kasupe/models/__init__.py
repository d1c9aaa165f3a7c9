"""SQLAlchemy models for the Kasupe backend.

All models are imported here so that ``Base.metadata`` knows every table
before ``init_models()`` runs. If you add a new model, import it in this file.
"""

from kasupe.models.blog_post import BlogPost
from kasupe.models.booking import Booking
from kasupe.models.car import Car
from kasupe.models.subscriber import Subscriber
from kasupe.models.testimonial import Testimonial
from kasupe.models.user import AdminUser, Customer

__all__ = [
    "AdminUser",
    "BlogPost",
    "Booking",
    "Car",
    "Customer",
    "Subscriber",
    "Testimonial",
]
