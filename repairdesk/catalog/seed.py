from repairdesk.catalog.models import Part, PartCategory

_MOTOR = PartCategory.MOTOR
_ELECTRONICS = PartCategory.ELECTRONICS
_CHASSIS = PartCategory.CHASSIS
_CUTTING = PartCategory.CUTTING
_ACCESSORIES = PartCategory.ACCESSORIES

_DEFAULT_PARTS: list[tuple[str, str, PartCategory, float]] = [
    ("m-wheel-l", "Left Front Wheel Motor", _MOTOR, 320),
    ("m-wheel-r", "Right Front Wheel Motor", _MOTOR, 320),
    ("m-wheel-rl", "Left Rear Wheel Motor", _MOTOR, 320),
    ("m-wheel-rr", "Right Rear Wheel Motor", _MOTOR, 320),
    ("m-cut-l", "Left Cutting Motor", _MOTOR, 280),
    ("m-cut-r", "Right Cutting Motor", _MOTOR, 280),
    ("m-cut-c", "Center Cutting Motor", _MOTOR, 340),
    ("m-lift", "Lifting Motor", _MOTOR, 90),
    ("e-mainboard", "Mainboard", _ELECTRONICS, 430),
    ("e-drive-board", "Drive Board", _ELECTRONICS, 490),
    ("e-keypad", "Keypad Board", _ELECTRONICS, 230),
    ("e-height-sensor", "Height Sensor Board", _ELECTRONICS, 46),
    ("e-panel-back", "Back Panel", _ELECTRONICS, 120),
    ("e-battery", "Battery", _ELECTRONICS, 600),
    ("c-shell-top", "Top Cover", _CHASSIS, 890),
    ("c-chassis-bottom", "Bottom Chasis", _CHASSIS, 980),
    ("c-axle-front", "Front Axle", _CHASSIS, 100),
    ("c-axle-back", "Back Axle", _CHASSIS, 100),
    ("c-boot-l", "Left Rubber Boot", _CHASSIS, 20),
    ("c-boot-r", "Right Rubber Boot", _CHASSIS, 20),
    ("c-sleeve-l", "Left Rubber Sleeve", _CHASSIS, 15),
    ("c-sleeve-r", "Right Rubber Sleeve", _CHASSIS, 15),
    ("c-suspension-l", "Left Suspension Rod", _CHASSIS, 10),
    ("c-suspension-r", "Right Suspension Rod", _CHASSIS, 10),
    ("c-tire-fl", "Left Front Wheel Tire", _CHASSIS, 80),
    ("c-tire-fr", "Right Front Wheel Tire", _CHASSIS, 80),
    ("c-tire-rl", "Left Rear Wheel Tire", _CHASSIS, 132),
    ("c-tire-rr", "Right Rear Wheel Tire", _CHASSIS, 132),
    ("c-guard-side-l", "Left Side Guard", _CHASSIS, 18),
    ("c-guard-side-r", "Right Side Guard", _CHASSIS, 18),
    ("cut-disk", "Left Cutting Disk", _CUTTING, 38),
    ("cut-disk-r", "Right Cutting Disk", _CUTTING, 38),
    ("cut-disk-c", "Center Cutting Disk", _CUTTING, 36),
    ("cut-guard-l", "Left Cutting Guard", _CUTTING, 40),
    ("cut-guard-r", "Right Cutting Guard", _CUTTING, 40),
    ("cut-bracket", "Cutting Disk Mounting Bracket", _CUTTING, 12),
    ("a-rtk-station", "RTK Reference Station", _ACCESSORIES, 688),
    ("a-charge-station", "Charging Station", _ACCESSORIES, 650),
    ("a-power-adapte", "Power Supply Unit", _ACCESSORIES, 680),
    ("a-vision-3d", "3D Vision Module", _ACCESSORIES, 639),
    ("a-bumper", "Bumper", _ACCESSORIES, 138),
]


def default_parts() -> list[Part]:
    """Return a fresh copy of the Mammotion spare-parts list."""
    return [
        Part(id=part_id, name=name, category=category, price=price)
        for part_id, name, category, price in _DEFAULT_PARTS
    ]
