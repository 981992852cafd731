"""Question lifecycle: run the spoiler-bounded answer pipeline for one question.

State machine:

    pending --(answer stored)--> answered
    pending --(any error)------> failed
    answered / failed --(re-run)--> pending

Each run holds a lease on the question (see QuestionStore.claim), so two
concurrent runs for the same question cannot both proceed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from uuid import uuid4

from chapterwise.context import ContextAssembler
from chapterwise.embedder import Embedder
from chapterwise.exceptions import (
    DataIntegrityError,
    NoRelevantContentError,
    QuestionBusyError,
    QuestionNotFoundError,
)
from chapterwise.generator import AnswerGenerator
from chapterwise.models import AnswerResult, EmbeddedChapter, Question
from chapterwise.prompts import build_messages, validate_template
from chapterwise.ranker import RelevanceRanker, filter_by_boundary
from chapterwise.stores import ChapterStore, QuestionStore

logger = logging.getLogger(__name__)

DEFAULT_LEASE_SECONDS = 300.0


class QuestionAnswerer:
    """Orchestrates retrieval, context assembly and generation for stored questions.

    Pipeline for one question:
    1. Load the question (QuestionNotFoundError, no status change)
    2. Claim it: status pending + run lease (QuestionBusyError, no status change)
    3. Load chapters with embeddings, embed the question text
    4. Rank chapters inside the spoiler boundary, assemble the context
    5. Build the prompt and generate the answer
    6. Store the answer with status answered

    Any error after step 2 sets status failed and is re-raised unchanged.
    """

    def __init__(
        self,
        question_store: QuestionStore,
        chapter_store: ChapterStore,
        embedder: Embedder,
        generator: AnswerGenerator,
        ranker: RelevanceRanker | None = None,
        assembler: ContextAssembler | None = None,
        answer_prompt: str | None = None,
        embedding_dimension: int | None = None,
        lease_seconds: float = DEFAULT_LEASE_SECONDS,
    ) -> None:
        """Initialize the answerer.

        Args:
            question_store: Store holding questions and their status
            chapter_store: Store holding chapters and chapter embeddings
            embedder: Embedder for the question text
            generator: Answer generator wrapping the LLM client
            ranker: Relevance ranker (default: top 5)
            assembler: Context assembler (default budget: 24000 chars)
            answer_prompt: Custom user prompt template (see prompts.validate_template)
            embedding_dimension: Expected embedding length, or None to take it
                                 from the stored chapter embeddings
            lease_seconds: How long a run may hold a question before another
                           run is allowed to take it over
        """
        self.question_store = question_store
        self.chapter_store = chapter_store
        self.embedder = embedder
        self.generator = generator
        self.ranker = ranker or RelevanceRanker()
        self.assembler = assembler or ContextAssembler()
        self.answer_prompt = validate_template(answer_prompt) if answer_prompt else None
        self.embedding_dimension = embedding_dimension
        self.lease_seconds = lease_seconds

    def generate_answer(self, question_id: str) -> str:
        """Answer a stored question and return the answer text."""
        return self.answer_question(question_id).answer_text

    def answer_question(self, question_id: str) -> AnswerResult:
        """Answer a stored question.

        Returns:
            AnswerResult with the answer and the chapters used as context.

        Raises:
            QuestionNotFoundError: The question does not exist.
            QuestionBusyError: Another run holds the question.
            ChaptersNotFoundError, DataIntegrityError, NoRelevantContentError,
            ProviderError, EmptyResponseError: The run failed; status is failed.
        """
        question, run_token = self._start(question_id)
        try:
            chapters = self.chapter_store.load_embedded_chapters(
                question.title_id, self.embedding_dimension
            )
            self._check_boundary(question, chapters)
            query_embedding = self.embedder.embed_text(question.question_text)
            result, messages = self._prepare(question, chapters, query_embedding)
            answer = self.generator.generate(messages)
            return self._finish(question, run_token, answer, result)
        except Exception:
            self._mark_failed(question_id, run_token)
            raise

    async def agenerate_answer(self, question_id: str) -> str:
        """Answer a stored question and return the answer text (async)."""
        return (await self.aanswer_question(question_id)).answer_text

    async def aanswer_question(self, question_id: str) -> AnswerResult:
        """Answer a stored question (async).

        Same contract as answer_question(). The chapter load and the question
        embedding run concurrently; store calls run in worker threads.
        """
        question, run_token = await asyncio.to_thread(self._start, question_id)
        try:
            chapters, query_embedding = await asyncio.gather(
                asyncio.to_thread(
                    self.chapter_store.load_embedded_chapters,
                    question.title_id,
                    self.embedding_dimension,
                ),
                self.embedder.aembed_text(question.question_text),
            )
            self._check_boundary(question, chapters)
            result, messages = self._prepare(question, chapters, query_embedding)
            answer = await self.generator.agenerate(messages)
            return await asyncio.to_thread(self._finish, question, run_token, answer, result)
        except (Exception, asyncio.CancelledError):
            await asyncio.to_thread(self._mark_failed, question_id, run_token)
            raise

    def _start(self, question_id: str) -> tuple[Question, str]:
        question = self.question_store.get(question_id)
        if question is None:
            raise QuestionNotFoundError(question_id)

        run_token = uuid4().hex
        if not self.question_store.claim(question_id, run_token, self.lease_seconds):
            if self.question_store.get(question_id) is None:
                raise QuestionNotFoundError(question_id)
            raise QuestionBusyError(question_id)
        logger.info("Answering question %s (title %s)", question_id, question.title_id)
        return question, run_token

    @staticmethod
    def _check_boundary(question: Question, chapters: Sequence[EmbeddedChapter]) -> None:
        # Checked before the embedding call so a closed boundary costs no provider request.
        if not filter_by_boundary(chapters, question.chapter_limit):
            raise NoRelevantContentError(
                f"No chapters available within the chapter limit: {question.chapter_limit}"
            )

    def _prepare(
        self,
        question: Question,
        chapters: Sequence[EmbeddedChapter],
        query_embedding: Sequence[float],
    ) -> tuple[AnswerResult, list[dict]]:
        expected = self.embedding_dimension
        if expected is not None and len(query_embedding) != expected:
            raise DataIntegrityError(
                f"Question embedding has dimension {len(query_embedding)}, expected {expected}"
            )

        selection = self.ranker.rank(chapters, question.chapter_limit, query_embedding)
        context = self.assembler.assemble(selection)
        assert question.chapter_limit is not None
        messages = build_messages(
            context.text,
            question.question_text,
            question.chapter_limit,
            template=self.answer_prompt,
        )
        result = AnswerResult(
            question_id=question.id,
            answer_text="",
            chapters=context.chapters,
            dropped=context.dropped,
        )
        return result, messages

    def _finish(
        self,
        question: Question,
        run_token: str,
        answer: str,
        result: AnswerResult,
    ) -> AnswerResult:
        if not self.question_store.complete(question.id, run_token, answer):
            raise QuestionBusyError(
                question.id,
                f"Lost the lease on question {question.id} before the answer was stored",
            )
        logger.info(
            "Answered question %s from chapters %s",
            question.id,
            [c.chapter.order for c in result.chapters],
        )
        return result.model_copy(update={"answer_text": answer})

    def _mark_failed(self, question_id: str, run_token: str) -> None:
        try:
            if self.question_store.fail(question_id, run_token):
                logger.warning("Question %s failed", question_id)
            else:
                logger.warning("Question %s failed but no longer holds its lease", question_id)
        except Exception:
            logger.exception("Could not mark question %s as failed", question_id)
