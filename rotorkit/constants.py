"""State codes and identifiers shared by the rotator controller."""

from __future__ import annotations

from enum import IntEnum, IntFlag

CONFIGURATION_STRUCT_VERSION = 123
PROCESS_TABLE_SIZE = 14


class Axis(IntEnum):
    AZ = 1
    EL = 2


class AzimuthState(IntEnum):
    IDLE = 0
    SLOW_START_CW = 1
    SLOW_START_CCW = 2
    NORMAL_CW = 3
    NORMAL_CCW = 4
    SLOW_DOWN_CW = 5
    SLOW_DOWN_CCW = 6
    INITIALIZE_SLOW_START_CW = 7
    INITIALIZE_SLOW_START_CCW = 8
    INITIALIZE_TIMED_SLOW_DOWN_CW = 9
    INITIALIZE_TIMED_SLOW_DOWN_CCW = 10
    TIMED_SLOW_DOWN_CW = 11
    TIMED_SLOW_DOWN_CCW = 12
    INITIALIZE_DIR_CHANGE_TO_CW = 13
    INITIALIZE_DIR_CHANGE_TO_CCW = 14
    INITIALIZE_NORMAL_CW = 15
    INITIALIZE_NORMAL_CCW = 16


class ElevationState(IntEnum):
    IDLE = 0
    SLOW_START_UP = 1
    SLOW_START_DOWN = 2
    NORMAL_UP = 3
    NORMAL_DOWN = 4
    SLOW_DOWN_DOWN = 5
    SLOW_DOWN_UP = 6
    INITIALIZE_SLOW_START_UP = 7
    INITIALIZE_SLOW_START_DOWN = 8
    INITIALIZE_TIMED_SLOW_DOWN_UP = 9
    INITIALIZE_TIMED_SLOW_DOWN_DOWN = 10
    TIMED_SLOW_DOWN_UP = 11
    TIMED_SLOW_DOWN_DOWN = 12
    INITIALIZE_DIR_CHANGE_TO_UP = 13
    INITIALIZE_DIR_CHANGE_TO_DOWN = 14
    INITIALIZE_NORMAL_UP = 15
    INITIALIZE_NORMAL_DOWN = 16


class RotationRequest(IntEnum):
    STOP = 0
    AZIMUTH = 1
    AZIMUTH_RAW = 2
    CW = 3
    CCW = 4
    UP = 5
    DOWN = 6
    ELEVATION = 7
    KILL = 8


class QueueState(IntEnum):
    NONE = 0
    IN_QUEUE = 1
    IN_PROGRESS_TIMED = 2
    IN_PROGRESS_TO_TARGET = 3


class ParkStatus(IntEnum):
    NOT_PARKED = 0
    PARK_INITIATED = 1
    PARKED = 2


class ClockStatus(IntEnum):
    FREE_RUNNING = 0
    GPS_SYNC = 1
    RTC_SYNC = 2
    SLAVE_SYNC = 3
    SLAVE_SYNC_GPS = 4
    NOT_PROVISIONED = 255


class LcdState(IntEnum):
    UNDEF = 0
    HEADING = 1
    IDLE_STATUS = 2
    TARGET_AZ = 3
    TARGET_EL = 4
    TARGET_AZ_EL = 5
    ROTATING_CW = 6
    ROTATING_CCW = 7
    ROTATING_TO = 8
    ELEVATING_TO = 9
    ELEVATING_UP = 10
    ELEVATING_DOWN = 11
    ROTATING_AZ_EL = 12
    PARKED = 13


class RemoteUnitCommand(IntEnum):
    NO_COMMAND = 0
    OTHER = 3
    AW = 4
    DHL = 5
    DOI = 6
    CL = 7
    RC = 8
    GS = 9
    RL = 10
    RR = 11
    RU = 12
    RD = 13
    RA = 14
    RE = 15
    RS = 16
    PM = 17


class NextionCapability(IntFlag):
    GS_232A = 1
    GS_232B = 2
    EASYCOM = 4
    DCU_1 = 8
    ELEVATION = 16
    CLOCK = 32
    GPS = 64
    MOON = 128
    SUN = 256
    RTC = 512
    SATELLITE = 1024
    PARK = 2048
    AUTOPARK = 4096
    AUDIBLE_ALERT = 8192


class NextionLanguage(IntFlag):
    ENGLISH = 1
    SPANISH = 2
    CZECH = 4
    PORTUGUESE_BRASIL = 8
    GERMAN = 16
    FRENCH = 32


class Process(IntEnum):
    LOOP = 0
    READ_HEADINGS = 1
    CHECK_SERIAL = 2
    SERVICE_NEXTION = 3
    UPDATE_LCD_DISPLAY = 4
    SERVICE_ROTATION = 5
    UPDATE_SUN_POSITION = 6
    UPDATE_MOON_POSITION = 7
    UPDATE_TIME = 8
    SERVICE_GPS = 9
    CHECK_FOR_DIRTY_CONFIGURATION = 10
    CHECK_BUTTONS = 11
    MISC_ADMIN = 12
    DEBUG = 13


class AudibleAlert(IntEnum):
    SERVICE = 0
    ACTIVATE = 1
    SILENCE = 2
    DISABLE = 3
    ENABLE = 4
    MANUAL_ACTIVATE = 5


class AutocorrectState(IntEnum):
    INACTIVE = 0
    WAITING_AZ = 1
    WAITING_EL = 2
    WATCHING_AZ = 3
    WATCHING_EL = 4