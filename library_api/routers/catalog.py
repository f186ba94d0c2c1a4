"""
Catalogue Routers

Subjects, publications, writers, translators, pronouns and FAQs are
plain resources: the six conventional routes and nothing else. Reads
are public; writes need the matching permission.
"""

from library_api.routers.resource import build_resource_router
from library_api.schemas.pronouns import PronounsCreate, PronounsListQuery, PronounsUpdate
from library_api.schemas.publication import (
    PublicationCreate,
    PublicationListQuery,
    PublicationUpdate,
)
from library_api.schemas.site import FaqCreate, FaqListQuery, FaqUpdate
from library_api.schemas.subject import SubjectCreate, SubjectListQuery, SubjectUpdate
from library_api.schemas.translator import (
    TranslatorCreate,
    TranslatorListQuery,
    TranslatorUpdate,
)
from library_api.schemas.writer import WriterCreate, WriterListQuery, WriterUpdate
from library_api.services.catalog import (
    faq_service,
    pronouns_service,
    publication_service,
    subject_service,
    translator_service,
    writer_service,
)

subjects_router = build_resource_router(
    subject_service,
    resource="subject",
    create_schema=SubjectCreate,
    update_schema=SubjectUpdate,
    list_schema=SubjectListQuery,
    prefix="/subjects",
    tags=["Subjects"],
    public_read=True,
)

publications_router = build_resource_router(
    publication_service,
    resource="publication",
    create_schema=PublicationCreate,
    update_schema=PublicationUpdate,
    list_schema=PublicationListQuery,
    prefix="/publications",
    tags=["Publications"],
    public_read=True,
)

writers_router = build_resource_router(
    writer_service,
    resource="writer",
    create_schema=WriterCreate,
    update_schema=WriterUpdate,
    list_schema=WriterListQuery,
    prefix="/writers",
    tags=["Writers"],
    public_read=True,
)

translators_router = build_resource_router(
    translator_service,
    resource="translator",
    create_schema=TranslatorCreate,
    update_schema=TranslatorUpdate,
    list_schema=TranslatorListQuery,
    prefix="/translators",
    tags=["Translators"],
    public_read=True,
)

pronouns_router = build_resource_router(
    pronouns_service,
    resource="pronouns",
    create_schema=PronounsCreate,
    update_schema=PronounsUpdate,
    list_schema=PronounsListQuery,
    prefix="/pronouns",
    tags=["Pronouns"],
    public_read=True,
)

faqs_router = build_resource_router(
    faq_service,
    resource="faq",
    create_schema=FaqCreate,
    update_schema=FaqUpdate,
    list_schema=FaqListQuery,
    prefix="/faqs",
    tags=["FAQs"],
    public_read=True,
)
