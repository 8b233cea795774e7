from __future__ import annotations

import json
import re
from pathlib import Path
from types import TracebackType
from typing import Callable, Dict, List, Optional, Type

from spindown.common.config.unbound import Config
from spindown.common.exceptions import ConfigValidationError


class ConfigValidator:
    type_to_check = {
        "str": str,
        "int": int,
        "bool": bool,
        "list": list,
    }

    def __init__(self) -> None:
        self.invalid_keys: Dict[str, str] = {}

    def __enter__(self) -> ConfigValidator:
        return self

    def __exit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        if exc_type is None and self.invalid_keys:
            raise ConfigValidationError("; ".join(self.invalid_keys.values()))

    def _check_type_validity(self, key: str, template_data: dict, config: Config) -> bool:
        if type(config[key]) is not self.type_to_check[template_data["type"]]:
            self.invalid_keys[key] = (
                f"Value of key '{key}' has invalid type {type(config[key]).__name__} "
                f"in {config.origin}. Should be: {template_data['type']}"
            )
            return False
        return True

    def _check_regex(self, key: str, template_data: dict, config: Config) -> bool:
        if not re.fullmatch(pattern=template_data["regex"], string=config[key]):
            self.invalid_keys[key] = (
                f"Value {config[key]} of key {key} in {config.origin} does not match the regex {template_data['regex']}"
            )
            return False
        return True

    def _check_items_regex(self, key: str, template_data: dict, config: Config) -> bool:
        pattern = template_data["item_regex"]
        invalid = [item for item in config[key] if not isinstance(item, str) or not re.fullmatch(pattern, item)]
        if invalid:
            self.invalid_keys[key] = (
                f"Items {invalid} of key {key} in {config.origin} do not match the regex {pattern}"
            )
            return False
        return True

    def _check_range(self, key: str, template_data: dict, config: Config) -> bool:
        minimum = template_data["range"]["min"]
        maximum = template_data["range"]["max"]
        if minimum is not None and config[key] < minimum:
            self.invalid_keys[key] = f"Value of key '{key}' in {config.origin} must be at least {minimum}"
            return False
        if maximum is not None and config[key] > maximum:
            self.invalid_keys[key] = f"Value of key '{key}' in {config.origin} must be at most {maximum}"
            return False
        return True

    def _check_compiles(self, key: str, template_data: dict, config: Config) -> bool:
        try:
            re.compile(config[key])
        except re.error as e:
            self.invalid_keys[key] = f"Value {config[key]} of key {key} in {config.origin} is no valid regex: {e}"
            return False
        return True

    def validate(self, config: Config, template_path: Path) -> None:
        template = self.get_template(template_path)
        self._validate_items(template, config)

    @staticmethod
    def get_template(template_path: Path) -> dict:
        with open(template_path, "r") as template_file:
            result: dict = json.load(template_file)
            return result

    def _validate_items(self, template: dict, config: Config) -> None:
        for template_key, template_data in template.items():
            self._validate_item(config, template_key, template_data)

    def _validate_item(self, config: Config, template_key: str, template_data: dict) -> None:
        if self._check_validation_required(config, template_key, template_data):
            for step_func in self.infer_validation_steps(template_data):
                if not step_func(template_key, template_data, config):
                    break

    def infer_validation_steps(self, template_data: dict) -> List[Callable[[str, dict, Config], bool]]:
        steps: List[Callable[[str, dict, Config], bool]] = []
        if "type" in template_data:
            steps.append(self._check_type_validity)
        if template_data.get("characteristic") == "regex":
            steps.append(self._check_compiles)
        if "regex" in template_data:
            steps.append(self._check_regex)
        if "item_regex" in template_data:
            steps.append(self._check_items_regex)
        if "range" in template_data:
            steps.append(self._check_range)
        return steps

    def _check_validation_required(self, config: Config, template_key: str, template_data: dict) -> bool:
        if template_key in config:
            return True
        if not template_data.get("optional", False):
            self.invalid_keys[template_key] = f"required key {template_key} is missing in {config.origin}"
        return False
