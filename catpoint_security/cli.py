"""Command-line control panel for the catpoint security system."""

import argparse
import sys
from typing import List, Optional

from .config_manager import ConfigManager
from .models.security import AlarmStatus, ArmingStatus, Sensor, SensorType
from .services.error_handler import SecurityError
from .services.image_service import create_image_service, load_image
from .services.interfaces import StatusListener
from .services.repository import InMemorySecurityRepository, create_repository
from .services.security_service import SecurityService
from .logging_config import get_logger, setup_logging

logger = get_logger("cli")

ARMING_CHOICES = {
    "disarmed": ArmingStatus.DISARMED,
    "home": ArmingStatus.ARMED_HOME,
    "away": ArmingStatus.ARMED_AWAY,
}


class ConsoleStatusListener(StatusListener):
    """Prints status changes the way the control panel shows them."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout

    def notify(self, alarm_status: AlarmStatus) -> None:
        print(f"Alarm status: {alarm_status.description}", file=self.stream)

    def cat_detected(self, cat: bool) -> None:
        if cat:
            print("DANGER - CAT DETECTED", file=self.stream)
        else:
            print("Cat not detected", file=self.stream)

    def sensor_status_changed(self) -> None:
        pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="catpoint", description="Catpoint home security control panel")
    parser.add_argument("--config", default=None, help="Path to the JSON configuration file")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("status", help="Show arming status, alarm status and sensors")

    arm = commands.add_parser("arm", help="Change the arming status")
    arm.add_argument("mode", choices=sorted(ARMING_CHOICES))

    sensor = commands.add_parser("sensor", help="Manage sensors")
    sensor_commands = sensor.add_subparsers(dest="sensor_command", required=True)

    add = sensor_commands.add_parser("add", help="Add a sensor")
    add.add_argument("name")
    add.add_argument("type", choices=[t.value.lower() for t in SensorType])

    for name, help_text in (("remove", "Remove a sensor"),
                            ("activate", "Activate a sensor"),
                            ("deactivate", "Deactivate a sensor")):
        command = sensor_commands.add_parser(name, help=help_text)
        command.add_argument("name")

    scan = commands.add_parser("scan", help="Scan an image for cats")
    scan.add_argument("image", help="Path to the image file")

    return parser


def print_status(service: SecurityService, stream=None) -> None:
    stream = stream or sys.stdout
    print(f"System status: {service.get_arming_status().description}", file=stream)
    print(f"Alarm status: {service.get_alarm_status().description}", file=stream)

    sensors = sorted(service.get_sensors())
    if not sensors:
        print("No sensors", file=stream)
    for sensor in sensors:
        state = "Active" if sensor.active else "Inactive"
        print(f"  {sensor.name} ({sensor.sensor_type.value}): {state}", file=stream)


def run_command(args: argparse.Namespace, service: SecurityService,
                repository: InMemorySecurityRepository) -> int:
    if args.command == "status":
        print_status(service)
    elif args.command == "arm":
        service.set_arming_status(ARMING_CHOICES[args.mode])
        print(f"System status: {service.get_arming_status().description}")
    elif args.command == "sensor":
        if args.sensor_command == "add":
            service.add_sensor(Sensor(args.name, SensorType(args.type.upper())))
            print(f"Added sensor {args.name}")
        else:
            sensor = repository.find_sensor(args.name)
            if args.sensor_command == "remove":
                service.remove_sensor(sensor)
                print(f"Removed sensor {args.name}")
            else:
                service.change_sensor_activation_status(sensor, args.sensor_command == "activate")
                print(f"Sensor {sensor.name}: {'Active' if sensor.active else 'Inactive'}")
    elif args.command == "scan":
        if service.process_image(load_image(args.image)) is None:
            print("Image scan failed", file=sys.stderr)
            return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the catpoint command."""
    args = build_parser().parse_args(argv)

    config_manager = ConfigManager(args.config)
    if not config_manager.validate_config():
        print(f"Invalid configuration in {config_manager.config_path}", file=sys.stderr)
        return 2
    config = config_manager.get_config()

    setup_logging(config.log_level, config.log_dir)

    try:
        repository = create_repository(config.repository_path)
        image_service = create_image_service(config.image_service, config.cascade_path)
        service = SecurityService(repository, image_service, config.confidence_threshold)
        service.add_status_listener(ConsoleStatusListener())
        return run_command(args, service, repository)
    except SecurityError as e:
        logger.error(f"Command {args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
