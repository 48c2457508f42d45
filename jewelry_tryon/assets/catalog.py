"""주얼리 에셋 목록 (카테고리 → 이미지 경로)"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from ..config.constants import IMAGE_EXTENSIONS
from ..utils import get_logger

logger = get_logger(__name__)


def category_key(metal: str, jewelry_type: str) -> str:
    """
    카테고리 키 생성

    Example:
        >>> category_key('gold', 'earrings')
        'gold_earrings'
    """
    if not metal or not jewelry_type:
        raise ValueError("metal and jewelry_type must be non-empty")
    return f"{metal}_{jewelry_type}"


class AssetCatalog(ABC):
    """카테고리별 에셋 경로 목록 제공 인터페이스"""

    def __init__(self, root: Path):
        self.root = Path(root)

    @abstractmethod
    def list_assets(self, category: str) -> List[Path]:
        """카테고리의 에셋 경로 리스트 반환 (없으면 빈 리스트)"""

    @abstractmethod
    def categories(self) -> List[str]:
        """사용 가능한 카테고리 키 목록"""

    def asset_path(self, category: str, filename: str) -> Path:
        return self.root / category / filename


class ManifestAssetCatalog(AssetCatalog):
    """설정 파일의 고정 매니페스트 기반 카탈로그"""

    def __init__(self, root: Path, manifest: Dict[str, Sequence[str]]):
        super().__init__(root)
        self.manifest: Dict[str, Tuple[str, ...]] = {
            key: tuple(files) for key, files in manifest.items()
        }

    def list_assets(self, category: str) -> List[Path]:
        files = self.manifest.get(category, ())
        return [self.asset_path(category, filename) for filename in files]

    def categories(self) -> List[str]:
        return sorted(self.manifest)


class DirectoryAssetCatalog(AssetCatalog):
    """카테고리 폴더를 탐색하는 카탈로그 (root/<category>/*.png 등)"""

    def __init__(self, root: Path, extensions: Sequence[str] = IMAGE_EXTENSIONS):
        super().__init__(root)
        self.extensions = tuple(ext.lower() for ext in extensions)

    def list_assets(self, category: str) -> List[Path]:
        folder = self.root / category
        if not folder.is_dir():
            logger.debug(f"Asset folder not found: {folder}")
            return []

        return sorted(
            path for path in folder.iterdir()
            if path.is_file() and path.suffix.lower() in self.extensions
        )

    def categories(self) -> List[str]:
        if not self.root.is_dir():
            return []
        return sorted(path.name for path in self.root.iterdir() if path.is_dir())
