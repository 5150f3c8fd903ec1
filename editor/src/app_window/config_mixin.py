"""Configuration management for EmojiArtEditor"""

import os
import json

from constants import (
	DEFAULT_EMOJI_FONT_SIZE, DEFAULT_FETCH_TIMEOUT, DEFAULT_LOG_LEVEL,
	DEFAULT_PALETTE_STORE_NAME, MAX_RECENT_BACKGROUNDS
)
from models.palette import PaletteStore
from utils.logger import loggerRaise, configure_logging


class ConfigMixin:
	"""Configuration file operations, palettes and recent backgrounds

	Expects config_dir and config_file attributes on the host.
	"""

	def _apply_config_defaults(self):
		self.default_emoji_font_size = DEFAULT_EMOJI_FONT_SIZE
		self.fetch_timeout = DEFAULT_FETCH_TIMEOUT
		self.log_level = DEFAULT_LOG_LEVEL
		self.palette_store = PaletteStore(DEFAULT_PALETTE_STORE_NAME)
		self.recent_backgrounds = []

	def _load_config(self):
		"""Load settings from config file; a missing file keeps defaults"""
		self._apply_config_defaults()
		if not os.path.exists(self.config_file):
			return
		try:
			with open(self.config_file, 'r', encoding='utf-8') as f:
				config = json.load(f)
		except (OSError, json.JSONDecodeError) as e:
			loggerRaise(e, "Error loading config")

		font_size = config.get('default_emoji_font_size', DEFAULT_EMOJI_FONT_SIZE)
		if isinstance(font_size, int) and font_size > 0:
			self.default_emoji_font_size = font_size

		timeout = config.get('fetch_timeout', DEFAULT_FETCH_TIMEOUT)
		if isinstance(timeout, (int, float)) and timeout > 0:
			self.fetch_timeout = timeout

		self.log_level = str(config.get('log_level', DEFAULT_LOG_LEVEL))
		configure_logging(self.log_level)

		if config.get('palettes'):
			self.palette_store = PaletteStore.from_dicts(DEFAULT_PALETTE_STORE_NAME, config['palettes'])

		recent = config.get('recent_backgrounds', [])
		self.recent_backgrounds = [url for url in recent if isinstance(url, str)][:MAX_RECENT_BACKGROUNDS]

	def _save_config(self):
		"""Save settings to config file"""
		config = {
			'default_emoji_font_size': self.default_emoji_font_size,
			'fetch_timeout': self.fetch_timeout,
			'log_level': self.log_level,
			'palettes': self.palette_store.to_dicts(),
			'recent_backgrounds': self.recent_backgrounds[:MAX_RECENT_BACKGROUNDS],
		}
		try:
			os.makedirs(self.config_dir, exist_ok=True)
			with open(self.config_file, 'w', encoding='utf-8') as f:
				json.dump(config, f, indent=2, ensure_ascii=False)
		except OSError as e:
			loggerRaise(e, "Error saving config")

	def _add_to_recent_backgrounds(self, url):
		"""Move url to the front of the recent backgrounds list"""
		if url in self.recent_backgrounds:
			self.recent_backgrounds.remove(url)
		self.recent_backgrounds.insert(0, url)
		self.recent_backgrounds = self.recent_backgrounds[:MAX_RECENT_BACKGROUNDS]

		if hasattr(self, 'recent_menu'):
			self._update_recent_backgrounds_menu()

		self._save_config()

	def _update_recent_backgrounds_menu(self):
		"""Rebuild the Recent Backgrounds submenu"""
		self.recent_menu.clear()

		if not self.recent_backgrounds:
			no_recent = self.recent_menu.addAction("No recent backgrounds")
			no_recent.setEnabled(False)
			return

		for url in self.recent_backgrounds:
			action = self.recent_menu.addAction(url)
			action.setToolTip(url)
			action.triggered.connect(lambda checked, u=url: self._open_recent_background(u))

		self.recent_menu.addSeparator()
		clear_action = self.recent_menu.addAction("Clear Recent Backgrounds")
		clear_action.triggered.connect(self._clear_recent_backgrounds)

	def _clear_recent_backgrounds(self):
		self.recent_backgrounds = []
		if hasattr(self, 'recent_menu'):
			self._update_recent_backgrounds_menu()
		self._save_config()
