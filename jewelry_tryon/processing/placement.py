"""앵커 / 스케일 기준으로 오버레이 그리기 영역 계산"""

from typing import Dict, List, Mapping, Optional

from ..config.settings import PlacementConfig
from ..models import AnchorName, DrawCommand, OverlayImage, OverlaySlot, Point2D


class PlacementPlanner:
    """
    오버레이 배치 계산

    - 귀걸이: 너비 = scale * K_EAR, 좌/우 귀 앵커에 같은 이미지 (좌우 반전 없음)
    - 목걸이: 너비 = scale * K_NECK, 목 앵커 아래 scale * K_OFFSET 만큼 이동
    - 높이는 항상 원본 종횡비 유지
    """

    def __init__(self, config: Optional[PlacementConfig] = None):
        self.config = config or PlacementConfig()

    def plan(
        self,
        anchors: Mapping[AnchorName, Point2D],
        scale: float,
        overlays: Mapping[OverlaySlot, Optional[OverlayImage]]
    ) -> List[DrawCommand]:
        """
        그리기 명령 생성

        Args:
            anchors: 평활화된 앵커 맵
            scale: 눈 사이 픽셀 거리
            overlays: 슬롯별 로드된 이미지 (없으면 None)

        Returns:
            DrawCommand 리스트 (귀걸이 먼저, 목걸이 나중)
        """
        commands: List[DrawCommand] = []

        earring = overlays.get(OverlaySlot.EARRING)
        if earring is not None:
            commands.extend(self.plan_earrings(anchors, scale, earring))

        necklace = overlays.get(OverlaySlot.NECKLACE)
        if necklace is not None:
            commands.extend(self.plan_necklace(anchors, scale, necklace))

        return commands

    def plan_earrings(
        self,
        anchors: Mapping[AnchorName, Point2D],
        scale: float,
        image: OverlayImage
    ) -> List[DrawCommand]:
        width = scale * self.config.earring_scale
        height = self._height_for(image, width)

        commands = []
        for name in (AnchorName.LEFT_EAR, AnchorName.RIGHT_EAR):
            anchor = anchors.get(name)
            if anchor is None:
                continue
            commands.append(DrawCommand(
                image=image,
                x=anchor.x - width / 2,
                y=anchor.y,
                width=width,
                height=height,
                slot=OverlaySlot.EARRING,
            ))
        return commands

    def plan_necklace(
        self,
        anchors: Mapping[AnchorName, Point2D],
        scale: float,
        image: OverlayImage
    ) -> List[DrawCommand]:
        neck = anchors.get(AnchorName.NECK)
        if neck is None:
            return []

        width = scale * self.config.necklace_scale
        height = self._height_for(image, width)
        offset = scale * self.config.necklace_offset

        return [DrawCommand(
            image=image,
            x=neck.x - width / 2,
            y=neck.y + offset,
            width=width,
            height=height,
            slot=OverlaySlot.NECKLACE,
        )]

    @staticmethod
    def _height_for(image: OverlayImage, width: float) -> float:
        # 원본 종횡비 유지
        return width * (image.height / image.width)

    def describe(self) -> Dict[str, float]:
        return {
            'earring_scale': self.config.earring_scale,
            'necklace_scale': self.config.necklace_scale,
            'necklace_offset': self.config.necklace_offset,
        }
