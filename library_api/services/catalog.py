"""
Catalogue Services

Resources with no behaviour beyond the generic CRUD operations get a
plain ResourceService instance each. Routers import these instances.
"""

from library_api.models import Faq, Pronouns, Publication, Subject, Translator, Writer
from library_api.schemas.pronouns import PronounsResponse
from library_api.schemas.publication import PublicationResponse
from library_api.schemas.site import FaqResponse
from library_api.schemas.subject import SubjectResponse
from library_api.schemas.translator import TranslatorResponse
from library_api.schemas.writer import WriterResponse
from library_api.services.resource import MatchMode, ResourceService

subject_service = ResourceService(Subject, SubjectResponse, label="subject")

publication_service = ResourceService(
    Publication,
    PublicationResponse,
    label="publication",
)

pronouns_service = ResourceService(
    Pronouns,
    PronounsResponse,
    label="pronouns",
    plural="pronouns",
)

writer_service = ResourceService(Writer, WriterResponse, label="writer")

translator_service = ResourceService(Translator, TranslatorResponse, label="translator")

faq_service = ResourceService(
    Faq,
    FaqResponse,
    label="FAQ",
    unique_field="question",
    filters={"question": MatchMode.CONTAINS},
)
