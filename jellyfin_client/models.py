from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

from jellyfin_client.utils import build_authorization_header


class JellyfinModel(BaseModel):
    """
    Base for every wire model.

    Python attributes are snake_case, the server speaks PascalCase. Both
    spellings are accepted on input; `to_wire()` always emits PascalCase.
    """

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class SubtitleMode(str, Enum):
    """Subtitle display mode, serialized as the plain string value."""

    DEFAULT = "Default"
    ALWAYS = "Always"
    ONLY_FORCED = "OnlyForced"
    NONE = "None"
    SMART = "Smart"


class UserConfiguration(JellyfinModel):
    audio_language_preference: Optional[str] = None
    play_default_audio_track: bool = True
    subtitle_language_preference: str = ""
    display_missing_episodes: bool = False
    grouped_folders: List[str] = Field(default_factory=list)
    subtitle_mode: SubtitleMode = SubtitleMode.DEFAULT
    display_collections_view: bool = False
    enable_local_password: bool = False
    ordered_views: List[str] = Field(default_factory=list)
    latest_items_excludes: List[str] = Field(default_factory=list)
    my_media_excludes: List[str] = Field(default_factory=list)
    hide_played_in_latest: bool = True
    remember_audio_selections: bool = True
    remember_subtitle_selections: bool = True
    enable_next_episode_auto_play: bool = True


class UserAccessSchedule(JellyfinModel):
    user_id: str = ""
    day_of_week: str = "Sunday"
    start_hour: float = 0
    end_hour: float = 24


class UserPolicy(JellyfinModel):
    is_administrator: bool = False
    is_hidden: bool = False
    is_disabled: bool = False
    max_parental_rating: Optional[int] = None
    blocked_tags: List[str] = Field(default_factory=list)
    enable_user_preference_access: bool = True
    access_schedules: List[UserAccessSchedule] = Field(default_factory=list)
    block_unrated_items: List[str] = Field(default_factory=list)
    enable_remote_control_of_other_users: bool = False
    enable_shared_device_control: bool = True
    enable_remote_access: bool = True
    enable_live_tv_management: bool = True
    enable_live_tv_access: bool = True
    enable_media_playback: bool = True
    enable_audio_playback_transcoding: bool = True
    enable_video_playback_transcoding: bool = True
    enable_playback_remuxing: bool = True
    force_remote_source_transcoding: bool = False
    enable_content_deletion: bool = False
    enable_content_deletion_from_folders: List[str] = Field(default_factory=list)
    enable_content_downloading: bool = True
    enable_sync_transcoding: bool = True
    enable_media_conversion: bool = True
    enabled_devices: List[str] = Field(default_factory=list)
    enable_all_devices: bool = True
    enabled_channels: List[str] = Field(default_factory=list)
    enable_all_channels: bool = True
    enabled_folders: List[str] = Field(default_factory=list)
    enable_all_folders: bool = True
    invalid_login_attempt_count: int = 0
    login_attempts_before_lockout: int = -1
    max_active_sessions: int = 0
    enable_public_sharing: bool = True
    blocked_media_folders: List[str] = Field(default_factory=list)
    blocked_channels: List[str] = Field(default_factory=list)
    remote_client_bitrate_limit: int = 0
    authentication_provider_id: str = (
        "Jellyfin.Server.Implementations.Users.DefaultAuthenticationProvider"
    )
    password_reset_provider_id: str = (
        "Jellyfin.Server.Implementations.Users.DefaultPasswordResetProvider"
    )
    sync_play_access: str = "CreateAndJoinGroups"


class User(JellyfinModel):
    """A user profile. `id` is server-assigned and never changes."""

    name: str
    server_id: str = ""
    server_name: Optional[str] = None
    id: str
    primary_image_tag: Optional[str] = None
    has_password: bool = False
    has_configured_password: bool = False
    has_configured_easy_password: bool = False
    enable_auto_login: bool = False
    last_login_date: Optional[str] = None
    last_activity_date: Optional[str] = None
    configuration: UserConfiguration = Field(default_factory=UserConfiguration)
    policy: UserPolicy = Field(default_factory=UserPolicy)
    primary_image_aspect_ratio: Optional[float] = None


class SessionInfo(JellyfinModel):
    id: str = ""
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    client: Optional[str] = None
    device_id: Optional[str] = None
    device_name: Optional[str] = None
    application_version: Optional[str] = None
    remote_end_point: Optional[str] = None
    last_activity_date: Optional[str] = None
    last_playback_check_in: Optional[str] = None
    server_id: Optional[str] = None
    is_active: bool = False
    supports_media_control: bool = False
    supports_remote_control: bool = False
    has_custom_device_name: bool = False
    playable_media_types: List[str] = Field(default_factory=list)


class UserAuth(JellyfinModel):
    """
    Session record returned by a successful authentication.

    Immutable. A later authentication replaces it as a whole.
    """

    model_config = ConfigDict(frozen=True)

    user: User
    session_info: SessionInfo = Field(default_factory=SessionInfo)
    access_token: str
    server_id: str = ""

    def to_emby_header(self, device_name: str) -> str:
        return build_authorization_header(device_name, self.access_token)


class ForgotPasswordResult(JellyfinModel):
    action: str = "ContactAdmin"
    pin_file: Optional[str] = None
    pin_expiration_date: Optional[str] = None


class PinRedeemResult(JellyfinModel):
    success: bool = False
    users_reset: List[str] = Field(default_factory=list)


class UserItemData(JellyfinModel):
    played: bool = False
    played_percentage: Optional[float] = None
    play_count: int = 0
    is_favorite: bool = False
    last_played_date: Optional[str] = None
    playback_position_ticks: int = 0


class BaseItem(JellyfinModel):
    id: str
    name: Optional[str] = None
    server_id: Optional[str] = None
    type: Optional[str] = None
    media_type: Optional[str] = None
    is_folder: bool = False
    parent_id: Optional[str] = None
    series_id: Optional[str] = None
    series_name: Optional[str] = None
    season_id: Optional[str] = None
    season_name: Optional[str] = None
    index_number: Optional[int] = None
    parent_index_number: Optional[int] = None
    production_year: Optional[int] = None
    run_time_ticks: Optional[int] = None
    overview: Optional[str] = None
    image_tags: Dict[str, str] = Field(default_factory=dict)
    user_data: Optional[UserItemData] = None


class ItemsResult(JellyfinModel):
    items: List[BaseItem] = Field(default_factory=list)
    total_record_count: int = 0
    start_index: int = 0
