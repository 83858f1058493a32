"""End-to-end learning cycle: learn, feedback, maintain, export, import."""

from __future__ import annotations

from datetime import timedelta

import pytest

from cadence.container import Container
from cadence.domain.models import PatternType

SALES_CALLS = [
    "嗯， 我觉得 这个 产品 真的 很不错。 这个 价格 对吧？ 但是 运费 有点 贵。 好的 谢谢",
    "嗯， 我觉得 这个 有点 贵。 质量 很好 对吧？ 但是 运费 也 贵。 好的 再见",
    "嗯， 我觉得 可以。 真的 很 方便。 好的 拜拜",
]


class TestLearningCycle:
    """Full cycle through the container wiring."""

    def test_cycle(self, container: Container) -> None:
        service = container.learning_service
        notifications: list[int] = []
        service.on_pattern_learned(lambda patterns: notifications.append(len(patterns)))

        learned = service.learn_from_new_conversation(SALES_CALLS, speaker_label="seller")
        patterns = {p.pattern: p for p in service.get_all_patterns()}

        assert "嗯， 我觉得" in patterns
        assert patterns["嗯， 我觉得"].type == PatternType.LINGUISTIC
        assert patterns["嗯， 我觉得"].frequency == pytest.approx(1.0)
        assert patterns["但是 运费"].type == PatternType.STRUCTURAL
        assert "好的 谢谢" not in patterns
        assert notifications == [learned.total_patterns]

        opening = patterns["嗯， 我觉得"]
        for _ in range(6):
            service.record_user_feedback(opening.id, True)
        assert service.get_pattern(opening.id).effectiveness == 100.0

        relearned = service.learn_from_new_conversation(SALES_CALLS, speaker_label="seller")
        assert relearned.created_ids == []
        assert len(service.get_all_patterns()) == learned.total_patterns
        for pattern in service.get_all_patterns():
            assert len(pattern.examples) <= 5

        later = service.get_pattern(opening.id).metadata.last_seen + timedelta(days=8)
        result = service.run_maintenance(later)
        assert opening.id in result.decayed_ids
        assert opening.id in result.boosted_ids

        container.save_state()
        restored = Container.create(container.config)
        restored.load_state()
        assert restored.learning_service.export_learning_data()["patterns"] == (
            service.export_learning_data()["patterns"]
        )
        restored.close()
