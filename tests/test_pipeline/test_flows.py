"""Tests for the flows with a stubbed LLM."""

import pytest

from hr_assistant.errors import UpstreamError, ValidationError
from hr_assistant.models import (
    NOT_MENTIONED,
    AnalysisResult,
    ChatResponse,
    ChatTurn,
    GenerationResult,
    ParseResult,
)
from hr_assistant.parsers.samples import SAMPLE_JOB_POSTING
from hr_assistant.pipeline.analyzer import JDAnalyzer
from hr_assistant.pipeline.assistant import ChatAssistant
from hr_assistant.pipeline.file_parser import JDFileParser
from hr_assistant.pipeline.generator import JDGenerator
from hr_assistant.prompts import CHAT_SYSTEM_PROMPT


class TestJDGenerator:
    @pytest.mark.asyncio
    async def test_generate(self, stub_llm, generation_form, sample_job_description):
        llm, create = stub_llm({"jobDescription": sample_job_description})
        result = await JDGenerator(llm).generate(generation_form)

        assert isinstance(result, GenerationResult)
        assert result.job_description
        assert "## " in result.job_description
        assert "\n- " in result.job_description
        assert create.call_count == 1

    @pytest.mark.asyncio
    async def test_prompt_includes_form_fields(self, mock_llm_client, generation_form):
        await JDGenerator(mock_llm_client).generate(generation_form)

        call_args = mock_llm_client.generate_structured.call_args
        assert "Acme Logistics" in call_args.kwargs["prompt"]
        assert "Python, PostgreSQL, Docker" in call_args.kwargs["prompt"]
        assert call_args.kwargs["output_model"] is GenerationResult

    @pytest.mark.asyncio
    async def test_invalid_form_never_calls_llm(self, mock_llm_client, generation_form):
        generation_form["roleTitle"] = ""
        with pytest.raises(ValidationError) as exc_info:
            await JDGenerator(mock_llm_client).generate(generation_form)

        assert exc_info.value.field == "roleTitle"
        mock_llm_client.generate_structured.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_reply_is_validation_error(self, stub_llm, generation_form):
        llm, _ = stub_llm({"jobDescription": ""})
        with pytest.raises(ValidationError) as exc_info:
            await JDGenerator(llm).generate(generation_form)
        assert exc_info.value.source == "reply"

    @pytest.mark.asyncio
    async def test_prose_reply_is_validation_error(self, stub_llm, generation_form):
        llm, _ = stub_llm({"jobDescription": "We are hiring a backend engineer. Apply now."})
        with pytest.raises(ValidationError) as exc_info:
            await JDGenerator(llm).generate(generation_form)

        assert exc_info.value.source == "reply"
        assert exc_info.value.field == "jobDescription"
        assert exc_info.value.constraint == "invalid"

    @pytest.mark.asyncio
    async def test_reply_without_bullets_is_validation_error(self, stub_llm, generation_form):
        llm, _ = stub_llm({"jobDescription": "## About Acme\nWe build routing software."})
        with pytest.raises(ValidationError):
            await JDGenerator(llm).generate(generation_form)

    @pytest.mark.asyncio
    async def test_upstream_error_propagates(self, mock_llm_client, generation_form):
        mock_llm_client.generate_structured.side_effect = UpstreamError("provider down")
        with pytest.raises(UpstreamError):
            await JDGenerator(mock_llm_client).generate(generation_form)


class TestJDRegenerate:
    @pytest.mark.asyncio
    async def test_regenerate_returns_non_empty_shape(self, stub_llm, regeneration_form):
        llm, _ = stub_llm({"jobDescription": "## About Acme\n- Rephrased bullet"})
        result = await JDGenerator(llm).regenerate(regeneration_form)

        assert isinstance(result, GenerationResult)
        assert result.job_description

    @pytest.mark.asyncio
    async def test_repeated_calls_each_hit_llm(self, mock_llm_client, regeneration_form):
        generator = JDGenerator(mock_llm_client, regeneration_temperature=0.9)
        first = await generator.regenerate(regeneration_form)
        second = await generator.regenerate(regeneration_form)

        assert first.job_description and second.job_description
        assert mock_llm_client.generate_structured.call_count == 2
        assert mock_llm_client.generate_structured.call_args.kwargs["temperature"] == 0.9

    @pytest.mark.asyncio
    async def test_original_description_in_prompt(self, mock_llm_client, regeneration_form):
        await JDGenerator(mock_llm_client).regenerate(regeneration_form)
        prompt = mock_llm_client.generate_structured.call_args.kwargs["prompt"]
        assert "Design and maintain Python services" in prompt

    @pytest.mark.asyncio
    async def test_requires_original_description(self, mock_llm_client, generation_form):
        with pytest.raises(ValidationError) as exc_info:
            await JDGenerator(mock_llm_client).regenerate(generation_form)
        assert exc_info.value.field == "originalDescription"
        mock_llm_client.generate_structured.assert_not_called()


class TestJDAnalyzer:
    @pytest.mark.asyncio
    async def test_analyze(self, stub_llm, sample_job_description):
        llm, _ = stub_llm(
            {
                "structuredContent": "## Key Responsibilities\n- Build services",
                "recommendations": "Add a salary range.",
            }
        )
        result = await JDAnalyzer(llm).analyze({"jobDescription": sample_job_description})

        assert isinstance(result, AnalysisResult)
        assert result.recommendations == "Add a salary range."

    @pytest.mark.asyncio
    async def test_short_description_rejected_before_call(self, mock_llm_client):
        with pytest.raises(ValidationError) as exc_info:
            await JDAnalyzer(mock_llm_client).analyze({"jobDescription": "x" * 49})

        assert exc_info.value.constraint == "too_short"
        assert mock_llm_client.generate_structured.call_count == 0
        assert mock_llm_client.generate.call_count == 0

    @pytest.mark.asyncio
    async def test_reply_missing_recommendations(self, stub_llm, sample_job_description):
        llm, _ = stub_llm({"structuredContent": "## Role"})
        with pytest.raises(ValidationError) as exc_info:
            await JDAnalyzer(llm).analyze({"jobDescription": sample_job_description})
        assert exc_info.value.field == "recommendations"


class TestJDFileParser:
    @pytest.mark.asyncio
    async def test_parse(self, stub_llm, parse_reply):
        llm, _ = stub_llm(parse_reply)
        result = await JDFileParser(llm).parse({"fileContent": SAMPLE_JOB_POSTING})

        assert isinstance(result, ParseResult)
        assert result.salary_package == NOT_MENTIONED
        assert result.required_skills == ["React", "TypeScript", "GraphQL"]
        assert all(isinstance(item, str) for item in result.roles_and_responsibilities)
        assert len(result.roles_and_responsibilities) == 2

    @pytest.mark.asyncio
    async def test_prompt_carries_document_and_sentinel(self, mock_llm_client, sample_results):
        mock_llm_client.generate_structured.return_value = sample_results["parse"]
        await JDFileParser(mock_llm_client).parse({"fileContent": "Role: Data Analyst"})

        prompt = mock_llm_client.generate_structured.call_args.kwargs["prompt"]
        assert "Role: Data Analyst" in prompt
        assert NOT_MENTIONED in prompt

    @pytest.mark.asyncio
    async def test_empty_content_rejected(self, mock_llm_client):
        with pytest.raises(ValidationError):
            await JDFileParser(mock_llm_client).parse({"fileContent": "   "})
        mock_llm_client.generate_structured.assert_not_called()

    @pytest.mark.asyncio
    async def test_reply_with_wrong_list_shape(self, stub_llm, parse_reply):
        parse_reply["rolesAndResponsibilities"] = "Build things"
        llm, _ = stub_llm(parse_reply)
        with pytest.raises(ValidationError) as exc_info:
            await JDFileParser(llm).parse({"fileContent": SAMPLE_JOB_POSTING})
        assert exc_info.value.field == "rolesAndResponsibilities"


class TestChatAssistant:
    @pytest.mark.asyncio
    async def test_chat_passes_reply_through(self, stub_llm):
        llm, create = stub_llm("Open the Generate JD tab, fill in the form and submit it.")
        response = await ChatAssistant(llm).chat(
            {"history": [], "message": "How do I generate a job description?"}
        )

        assert isinstance(response, ChatResponse)
        assert response.response == "Open the Generate JD tab, fill in the form and submit it."
        assert create.call_args.kwargs["system"] == CHAT_SYSTEM_PROMPT

    @pytest.mark.asyncio
    async def test_history_forwarded(self, mock_llm_client):
        history = [{"role": "user", "content": "hi"}, {"role": "model", "content": "hello!"}]
        await ChatAssistant(mock_llm_client).chat({"history": history, "message": "thanks"})

        kwargs = mock_llm_client.chat.call_args.kwargs
        assert kwargs["message"] == "thanks"
        assert kwargs["history"] == [
            ChatTurn(role="user", content="hi"),
            ChatTurn(role="model", content="hello!"),
        ]

    @pytest.mark.asyncio
    async def test_blank_reply_is_validation_error(self, mock_llm_client):
        mock_llm_client.chat.return_value = "  "
        with pytest.raises(ValidationError) as exc_info:
            await ChatAssistant(mock_llm_client).chat({"message": "hello"})
        assert exc_info.value.source == "reply"

    @pytest.mark.asyncio
    async def test_blank_message_rejected(self, mock_llm_client):
        with pytest.raises(ValidationError):
            await ChatAssistant(mock_llm_client).chat({"history": [], "message": ""})
        mock_llm_client.chat.assert_not_called()
