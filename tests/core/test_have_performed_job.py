from __future__ import annotations

import pendulum
import pytest

from jobmatchers import (
    ConfigurationError,
    ExpectationFailure,
    GlobalIdentification,
    InnerAssertionFailure,
    Job,
    UsageError,
    eq,
    expect,
    have_enqueued_job,
    have_performed_job,
    instance_of,
    perform_job,
    use_queue_adapter,
)
from jobmatchers.core.matchers import ADAPTER_REQUIRED_MESSAGE

performed_arguments: list[tuple] = []


class HeavyLiftingJob(Job):
    def perform(self) -> None:
        pass


class HelloJob(Job):
    def perform(self, *arguments) -> None:
        performed_arguments.append(arguments)


class LoggingJob(Job):
    def perform(self) -> None:
        pass


class PerformedModel(GlobalIdentification):
    def __init__(self, id: str) -> None:
        self.id = id

    @classmethod
    def find(cls, model_id: str) -> PerformedModel:
        return cls(model_id)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PerformedModel) and self.id == other.id


@pytest.fixture
def performing(queue_adapter):
    performed_arguments.clear()
    with queue_adapter.perform_enqueued_jobs():
        yield queue_adapter


def noon_tomorrow() -> pendulum.DateTime:
    return pendulum.tomorrow("UTC").add(hours=12)


def test_raises_usage_error_when_subject_is_not_a_block(performing):
    with pytest.raises(UsageError):
        expect(HeavyLiftingJob.perform_later()).to(have_performed_job())


def test_passes_with_default_jobs_count(performing):
    expect(lambda: HeavyLiftingJob.perform_later()).to(have_performed_job())


def test_passes_when_using_alias(performing):
    expect(lambda: HeavyLiftingJob.perform_later()).to(perform_job())


def test_counts_only_jobs_performed_in_block(performing):
    HeavyLiftingJob.perform_later()

    expect(lambda: HeavyLiftingJob.perform_later()).to(have_performed_job().exactly(1))


def test_passes_when_negated(queue_adapter):
    expect(lambda: None).not_to(have_performed_job())


def test_fails_when_job_is_not_performed(queue_adapter):
    with pytest.raises(ExpectationFailure, match="expected to perform exactly 1 jobs, but performed 0"):
        expect(lambda: None).to(have_performed_job())


def test_fails_when_too_many_jobs_performed(performing):
    def perform_twice() -> None:
        HeavyLiftingJob.perform_later()
        HeavyLiftingJob.perform_later()

    with pytest.raises(ExpectationFailure, match="expected to perform exactly 1 jobs, but performed 2"):
        expect(perform_twice).to(have_performed_job().exactly(1))


def test_reports_correct_number_in_failure_message(queue_adapter):
    HeavyLiftingJob.perform_later()

    with pytest.raises(ExpectationFailure, match="expected to perform exactly 1 jobs, but performed 0"):
        expect(lambda: None).to(have_performed_job().exactly(1))


def test_fails_when_negated_and_job_is_performed(performing):
    with pytest.raises(
        ExpectationFailure, match="expected not to perform exactly 1 jobs, but performed 1"
    ):
        expect(lambda: HeavyLiftingJob.perform_later()).not_to(have_performed_job())


def test_passes_with_job_class(performing):
    def perform() -> None:
        HelloJob.perform_later()
        HeavyLiftingJob.perform_later()

    expect(perform).to(have_performed_job(HelloJob).exactly(1).times)


def test_passes_with_multiple_jobs(performing):
    def perform() -> None:
        HelloJob.perform_later()
        LoggingJob.perform_later()
        HeavyLiftingJob.perform_later()

    expect(perform).to(have_performed_job(HelloJob) & have_performed_job(LoggingJob))


@pytest.mark.parametrize("count, name", [(1, "once"), (2, "twice"), (3, "thrice")])
def test_passes_with_named_counts(performing, count, name):
    def perform() -> None:
        for _ in range(count):
            HelloJob.perform_later()

    expect(perform).to(have_performed_job().exactly(name))


def test_passes_with_at_least_count_when_over_limit(performing):
    def perform() -> None:
        HelloJob.perform_later()
        HelloJob.perform_later()

    expect(perform).to(have_performed_job().at_least("once"))


def test_passes_with_at_most_count_when_under_limit(performing):
    expect(lambda: HelloJob.perform_later()).to(have_performed_job().at_most("once"))


def test_generates_failure_message_with_at_least_hint(queue_adapter):
    with pytest.raises(ExpectationFailure, match="expected to perform at least 1 jobs, but performed 0"):
        expect(lambda: None).to(have_performed_job().at_least("once"))


def test_generates_failure_message_with_at_most_hint(performing):
    def perform() -> None:
        HelloJob.perform_later()
        HelloJob.perform_later()

    with pytest.raises(ExpectationFailure, match="expected to perform at most 1 jobs, but performed 2"):
        expect(perform).to(have_performed_job().at_most("once"))


def test_passes_with_queue_name(performing):
    expect(lambda: HelloJob.set(queue="low").perform_later()).to(
        have_performed_job().on_queue("low")
    )


def test_passes_with_scheduled_time(performing):
    date = noon_tomorrow()

    expect(lambda: HelloJob.set(wait_until=date).perform_later()).to(
        have_performed_job().at(date)
    )


def test_passes_with_arguments(performing):
    expect(lambda: HelloJob.perform_later(42, "David")).to(
        have_performed_job().with_args(42, "David")
    )
    assert performed_arguments == [(42, "David")]


def test_passes_with_global_id_argument(performing):
    model = PerformedModel("42")

    expect(lambda: HelloJob.perform_later(model)).to(have_performed_job().with_args(model))


def test_passes_with_argument_matchers(performing):
    expect(lambda: HelloJob.perform_later(42, "David")).to(
        have_performed_job().with_args(instance_of(int), instance_of(str))
    )


def test_generates_failure_message_with_all_options(performing):
    date = noon_tomorrow()
    message = (
        f"expected to perform exactly 2 jobs, with [42], on queue low, at {date}, but performed 0"
        "\nPerformed jobs:"
        "\n  HelloJob job with [1], on queue default"
    )

    with pytest.raises(ExpectationFailure) as exc:
        expect(lambda: HelloJob.perform_later(1)).to(
            have_performed_job(HelloJob).with_args(42).on_queue("low").at(date).exactly(2).times
        )

    assert str(exc.value) == message


def test_raises_configuration_error_without_test_adapter(queue_adapter):
    with use_queue_adapter("inline"):
        with pytest.raises(ConfigurationError) as exc:
            expect(lambda: HeavyLiftingJob.perform_later()).to(have_performed_job())

    assert str(exc.value) == ADAPTER_REQUIRED_MESSAGE


def test_fails_with_callback_rejecting_arguments(performing):
    def check(argument) -> None:
        expect(argument).to(eq("zxcv"))

    with pytest.raises(InnerAssertionFailure) as exc:
        expect(lambda: HelloJob.perform_later("asdf")).to(
            have_performed_job(HelloJob).satisfying(check)
        )

    assert "expected: 'zxcv'" in str(exc.value)
    assert "got: 'asdf'" in str(exc.value)


def test_passes_multiple_arguments_to_callback(performing):
    def check(first, second) -> None:
        expect(first).to(eq("asdf"))
        expect(second).to(eq("zxcv"))

    expect(lambda: HelloJob.perform_later("asdf", "zxcv")).to(
        have_performed_job(HelloJob).satisfying(check)
    )


def test_passes_deserialized_arguments_to_callback(performing):
    model = PerformedModel("42")

    def check(first, second) -> None:
        expect(first).to(eq(model))
        expect(second).to(eq({"symbolized_key": "asdf"}))

    expect(lambda: HelloJob.perform_later(model, {"symbolized_key": "asdf"})).to(
        have_performed_job(HelloJob).satisfying(check)
    )


def test_only_calls_callback_if_other_conditions_are_met(performing):
    noon = noon_tomorrow()
    midnight = pendulum.tomorrow("UTC")

    def perform() -> None:
        HelloJob.set(wait_until=noon).perform_later("asdf")
        HelloJob.set(wait_until=midnight).perform_later("zxcv")

    def check(argument) -> None:
        expect(argument).to(eq("asdf"))

    expect(perform).to(have_performed_job(HelloJob).at(noon).satisfying(check))


def test_fails_when_job_is_just_enqueued(queue_adapter):
    HeavyLiftingJob.perform_later()

    with pytest.raises(ExpectationFailure, match="expected to perform exactly 1 jobs, but performed 0"):
        expect(lambda: HeavyLiftingJob.perform_later()).to(have_performed_job(HeavyLiftingJob))


def test_enqueue_matcher_does_not_count_performed_jobs(performing):
    with pytest.raises(ExpectationFailure, match="but enqueued 0"):
        expect(lambda: HeavyLiftingJob.perform_later()).to(have_enqueued_job())
