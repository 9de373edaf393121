"""
Prompt模板管理器
负责加载、渲染和管理所有AI交互的提示词模板
"""

import yaml
from typing import Dict, Any, Optional
from pathlib import Path
from jinja2 import Environment, StrictUndefined
from pptmaker.core.config import settings
from pptmaker.core.log_utils import get_logger

logger = get_logger(__name__)


class PromptManager:
    """Prompt模板管理器"""

    def __init__(self, prompts_dir: Optional[Path] = None):
        """初始化prompt管理器"""
        self.prompts_dir = prompts_dir or Path(__file__).parent
        # 模板变量缺失时直接报错，避免把不完整的提示词发给模型
        self.env = Environment(undefined=StrictUndefined, keep_trailing_newline=True)
        self._templates_cache: Dict[str, Dict[str, Any]] = {}
        self._load_all_templates()

    def _load_all_templates(self):
        """加载所有模板文件"""
        for category_dir in sorted(self.prompts_dir.iterdir()):
            if not category_dir.is_dir() or category_dir.name.startswith('__'):
                continue

            category_name = category_dir.name
            self._templates_cache[category_name] = {}

            for template_file in sorted(category_dir.glob('*.yml')):
                try:
                    with open(template_file, 'r', encoding='utf-8') as f:
                        self._templates_cache[category_name][template_file.stem] = yaml.safe_load(f)
                except (OSError, yaml.YAMLError) as e:
                    logger.error(
                        f"加载模板文件失败: {template_file}",
                        operation="load_template_error",
                        exception=e
                    )

        logger.info(
            "Prompt模板加载完成",
            operation="prompt_templates_loaded",
            categories=list(self._templates_cache.keys())
        )

    def get_template(self, category: str, template_name: str) -> Optional[Dict[str, Any]]:
        """获取指定模板"""
        return self._templates_cache.get(category, {}).get(template_name)

    def _render_field(self, category: str, template_name: str, field: str, **kwargs) -> str:
        template_data = self.get_template(category, template_name)
        if not template_data:
            raise ValueError(f"模板不存在: {category}/{template_name}")

        template_str = template_data.get(field, '')
        if not template_str:
            raise ValueError(f"模板中未找到{field}: {category}/{template_name}")

        return self._render_template(template_str, **kwargs)

    def render_system_prompt(self, category: str, template_name: str, **kwargs) -> str:
        """渲染系统提示词"""
        return self._render_field(category, template_name, 'system_prompt', **kwargs)

    def render_user_prompt(self, category: str, template_name: str, **kwargs) -> str:
        """渲染用户提示词"""
        return self._render_field(category, template_name, 'user_prompt', **kwargs)

    def get_template_config(self, category: str, template_name: str) -> Dict[str, Any]:
        """获取模板配置信息"""
        template_data = self.get_template(category, template_name)
        if not template_data:
            return {}

        return {
            'temperature': template_data.get('temperature', settings.ai_default_temperature),
            'max_tokens': template_data.get('max_tokens', settings.ai_default_max_tokens),
            'description': template_data.get('description', ''),
            'version': template_data.get('version', '1.0')
        }

    def _render_template(self, template_str: str, **kwargs) -> str:
        """渲染模板字符串"""
        try:
            return self.env.from_string(template_str).render(**kwargs).strip()
        except Exception as e:
            logger.error(
                "模板渲染失败",
                operation="render_template_error",
                exception=e,
                template_preview=template_str[:100]
            )
            raise

    def list_templates(self) -> Dict[str, list]:
        """列出所有可用的模板"""
        return {category: list(templates.keys()) for category, templates in self._templates_cache.items()}


# 全局prompt管理器实例
prompt_manager = PromptManager()


def get_prompt_manager() -> PromptManager:
    """获取prompt管理器实例"""
    return prompt_manager


from .utils import PromptHelper  # noqa: E402
