#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
账户配置文件读取器
专门用于读取account.yaml配置文件，提供简洁的接口
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List


class AccountReader:
    """账户配置读取器"""

    def __init__(self, config_dir: str = None):
        """
        初始化账户配置读取器

        Args:
            config_dir: 配置文件目录，默认为当前文件所在目录
        """
        if config_dir is None:
            config_dir = os.path.dirname(os.path.abspath(__file__))

        self.config_dir = Path(config_dir)
        self.account_file = self.config_dir / 'account.yaml'
        self._config = None

    def _load_config(self) -> Dict[str, Any]:
        """加载配置文件"""
        if self._config is not None:
            return self._config

        if not self.account_file.exists():
            raise FileNotFoundError(f"账户配置文件不存在: {self.account_file}")

        try:
            with open(self.account_file, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"YAML解析错误: {e}") from e
        return self._config

    def get_all_accounts(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """
        获取所有账户配置

        Returns:
            dict: 格式为 {exchange: {account: {credentials}}}

        Example:
            {
                'clientapi': {
                    'main': {'keyid': '...', 'secret': '...'},
                    'sub1': {'keyid': '...', 'secret': '...'}
                }
            }
        """
        config = self._load_config()
        return config.get('accounts', {}) or {}

    def get_exchange_accounts(self, exchange: str) -> Dict[str, Dict[str, Any]]:
        """获取指定交易所的所有账户"""
        return self.get_all_accounts().get(exchange, {}) or {}

    def get_account(self, exchange: str, account: str) -> Dict[str, Any]:
        """获取指定账户的配置"""
        return self.get_exchange_accounts(exchange).get(account, {}) or {}

    def get_clientapi_credentials(self, account: str = 'main') -> Dict[str, str]:
        """
        获取账户认证信息

        Args:
            account: 账户名称，默认为'main'

        Returns:
            dict: 包含keyid, secret的字典 (未配置为空字符串)
        """
        account_config = self.get_account('clientapi', account)
        return {
            'keyid': str(account_config.get('keyid') or ''),
            'secret': str(account_config.get('secret') or ''),
        }

    def list_exchanges(self) -> List[str]:
        """获取所有可用的交易所列表"""
        return list(self.get_all_accounts().keys())

    def list_accounts(self, exchange: str) -> List[str]:
        """获取指定交易所的账户列表 (保持文件中的顺序)"""
        return list(self.get_exchange_accounts(exchange).keys())

    def is_account_valid(self, exchange: str, account: str) -> bool:
        """
        检查账户配置是否完整

        clientapi 账户需要 keyid 与 secret 均非空
        """
        account_config = self.get_account(exchange, account)
        if not account_config:
            return False
        if exchange == 'clientapi':
            creds = self.get_clientapi_credentials(account)
            return bool(creds['keyid'].strip() and creds['secret'].strip())
        return any(str(value).strip() for value in account_config.values() if value is not None)
