#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
配置文件读取器
读取YAML格式的配置文件 (clientapi.yaml 等)，并提供便捷的访问接口
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any
import logging

CLIENTAPI_CONFIG_FILE = 'clientapi.yaml'

# clientapi.yaml 中缺省的键使用这些值
DEFAULT_CLIENTAPI_CONFIG = {
    'base_url': None,
    'timeout': 10,
    'log_dir': None,
    'thread_safe': True,
}


class ConfigReader:
    """配置文件读取器类"""

    def __init__(self, config_dir: str = None):
        """
        初始化配置读取器

        Args:
            config_dir: 配置文件目录路径，默认为当前文件所在目录
        """
        if config_dir is None:
            config_dir = os.path.dirname(os.path.abspath(__file__))

        self.config_dir = Path(config_dir)
        self._configs = {}
        self._logger = logging.getLogger(__name__)

    def load_yaml(self, filename: str) -> Dict[str, Any]:
        """
        加载YAML配置文件

        Args:
            filename: 配置文件名（不包含路径）

        Returns:
            dict: 解析后的配置字典 (空文件返回 {})

        Raises:
            FileNotFoundError: 配置文件不存在
            ValueError: YAML解析错误
        """
        file_path = self.config_dir / filename

        if not file_path.exists():
            raise FileNotFoundError(f"配置文件不存在: {file_path}")

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self._logger.error(f"YAML解析错误 {filename}: {e}")
            raise ValueError(f"YAML解析错误 {filename}: {e}") from e

        # 缓存配置
        self._configs[filename] = config
        self._logger.info(f"成功加载配置文件: {filename}")
        return config

    def get_clientapi_config(self) -> Dict[str, Any]:
        """
        获取客户端配置, 缺省键使用 DEFAULT_CLIENTAPI_CONFIG

        Returns:
            dict: base_url, timeout, log_dir, thread_safe
        """
        if CLIENTAPI_CONFIG_FILE not in self._configs:
            self.load_yaml(CLIENTAPI_CONFIG_FILE)

        settings = dict(DEFAULT_CLIENTAPI_CONFIG)
        settings.update(self._configs[CLIENTAPI_CONFIG_FILE].get('clientapi', {}) or {})
        return settings

    def get_config(self, filename: str, key_path: str = None) -> Any:
        """
        获取配置文件中的指定值

        Args:
            filename: 配置文件名
            key_path: 键路径，用点分隔，如 'clientapi.base_url'

        Returns:
            配置值, 键不存在时返回 None

        Examples:
            timeout = reader.get_config('clientapi.yaml', 'clientapi.timeout')
        """
        if filename not in self._configs:
            self.load_yaml(filename)

        config = self._configs[filename]

        if key_path is None:
            return config

        value = config
        try:
            for key in key_path.split('.'):
                value = value[key]
            return value
        except (KeyError, TypeError):
            self._logger.warning(f"配置键不存在: {key_path}")
            return None
