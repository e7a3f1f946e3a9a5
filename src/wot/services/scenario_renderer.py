"""Преобразование дерева шагов сценария TestOps в текст для докстринга."""

from __future__ import annotations

from wot.models.testops import Scenario, ScenarioStep

EXPECTED_RESULT_BODY = "Expected Result"
STEP_SEPARATOR = "\n\t\t\t"
SUBSTEP_INDENT = "\t"


def _expected_substeps(scenario: Scenario, step: ScenarioStep) -> list[str]:
    """Тела проверок шага.

    Берутся только дети узла, на который указывает ``expected_result_id``,
    и только если тело этого узла — ровно ``"Expected Result"``.
    """
    if step.expected_result_id is None:
        return []
    expected = scenario.get_step(step.expected_result_id)
    if expected is None or expected.body != EXPECTED_RESULT_BODY:
        return []

    substeps: list[str] = []
    for child_id in expected.children or []:
        child = scenario.get_step(child_id)
        if child is not None:
            substeps.append(child.body)
    return substeps


def render_scenario(scenario: Scenario) -> str:
    """Собрать упорядоченный текст шагов сценария.

    Шаги верхнего уровня идут в порядке ``root.children``, под каждым —
    его проверки с дополнительным отступом. Обход ровно двухуровневый:
    более глубокая вложенность не разворачивается. ID, отсутствующие
    в ``scenario_steps``, молча пропускаются. Пустой ``root.children``
    даёт пустую строку.
    """
    lines: list[str] = []
    for step_id in scenario.root.children:
        step = scenario.get_step(step_id)
        if step is None:
            continue
        lines.append(step.body)
        lines.extend(
            f"{SUBSTEP_INDENT}{body}" for body in _expected_substeps(scenario, step)
        )
    return STEP_SEPARATOR.join(lines)
