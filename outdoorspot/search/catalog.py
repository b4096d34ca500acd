"""Fixed in-memory catalog served when SEARCH_SOURCE is "catalog"."""
from typing import List

from outdoorspot.models import Activity, Coordinates, Location


def _image(text: str, color: str) -> str:
    return f"https://via.placeholder.com/400x300/{color}/ffffff?text={text}"


LOCATIONS: List[Location] = [
    Location(
        id="1",
        name="Yosemite National Park",
        description="Iconic granite cliffs and waterfalls",
        location="California",
        coordinates=Coordinates(lat=37.8651, lng=-119.5383),
        activities=["Camping", "Hiking"],
        rating=4.9,
        price=35,
        images=[_image("Yosemite", "4ade80")],
    ),
    Location(
        id="2",
        name="Glacier National Park",
        description="Pristine wilderness with alpine scenery",
        location="Montana",
        coordinates=Coordinates(lat=48.7596, lng=-113.7870),
        activities=["Hiking", "Wildlife Viewing"],
        rating=4.8,
        price=30,
        images=[_image("Glacier", "3b82f6")],
    ),
    Location(
        id="3",
        name="Grand Canyon National Park",
        description="One of the world's most spectacular natural wonders",
        location="Arizona",
        coordinates=Coordinates(lat=36.1069, lng=-112.1129),
        activities=["Photography", "Hiking", "Rafting"],
        rating=4.9,
        price=25,
        images=[_image("Grand+Canyon", "f59e0b")],
    ),
    Location(
        id="4",
        name="White Rock Lake Park",
        description="Urban lake in Dallas with a nine mile loop trail",
        location="Texas",
        coordinates=Coordinates(lat=32.8290, lng=-96.7236),
        activities=["Cycling", "Kayaking", "Bird Watching"],
        rating=4.6,
        price=0,
        images=[_image("White+Rock+Lake", "0ea5e9")],
    ),
    Location(
        id="5",
        name="Cedar Hill State Park",
        description="Lakeside campsites and bike trails on Joe Pool Lake",
        location="Texas",
        coordinates=Coordinates(lat=32.6248, lng=-96.9786),
        activities=["Camping", "Mountain Biking", "Fishing"],
        rating=4.5,
        price=20,
        images=[_image("Cedar+Hill", "16a34a")],
    ),
    Location(
        id="6",
        name="Dinosaur Valley State Park",
        description="Dinosaur tracks in the bed of the Paluxy River",
        location="Texas",
        coordinates=Coordinates(lat=32.2468, lng=-97.8142),
        activities=["Hiking", "Camping", "Swimming"],
        rating=4.7,
        price=25,
        images=[_image("Dinosaur+Valley", "a16207")],
    ),
    Location(
        id="7",
        name="Lake Texoma",
        description="Large reservoir on the Red River near Denison",
        location="Texas",
        coordinates=Coordinates(lat=33.8179, lng=-96.5703),
        activities=["Fishing", "Boating", "Camping"],
        rating=4.4,
        price=20,
        images=[_image("Lake+Texoma", "2563eb")],
    ),
    Location(
        id="8",
        name="Ray Roberts Lake State Park",
        description="Lake with equestrian trails and sandy beaches",
        location="Texas",
        coordinates=Coordinates(lat=33.3723, lng=-97.0412),
        activities=["Horseback Riding", "Fishing", "Camping"],
        rating=4.5,
        price=22,
        images=[_image("Ray+Roberts", "7c3aed")],
    ),
    Location(
        id="9",
        name="Arbor Hills Nature Preserve",
        description="Prairie, creek and forest trails in Plano",
        location="Texas",
        coordinates=Coordinates(lat=33.0484, lng=-96.8497),
        activities=["Hiking", "Cycling"],
        rating=4.7,
        price=0,
        images=[_image("Arbor+Hills", "65a30d")],
    ),
    Location(
        id="10",
        name="Tyler State Park",
        description="Pine forest around a spring-fed lake",
        location="Texas",
        coordinates=Coordinates(lat=32.4816, lng=-95.2958),
        activities=["Camping", "Paddling", "Hiking"],
        rating=4.6,
        price=20,
        images=[_image("Tyler", "15803d")],
    ),
]


ACTIVITIES: List[Activity] = [
    Activity(
        id="1",
        name="Half Dome Trail",
        category="hiking",
        description="Iconic granite dome with cables for the final ascent",
        location_name="Yosemite National Park",
        location_id="1",
        difficulty_level=5,
        distance_miles=16,
        estimated_duration_hours=12,
    ),
    Activity(
        id="2",
        name="Going-to-the-Sun Road",
        category="mountain_biking",
        description="Scenic mountain road with breathtaking views",
        location_name="Glacier National Park",
        location_id="2",
        difficulty_level=3,
        distance_miles=50,
        estimated_duration_hours=4,
    ),
    Activity(
        id="3",
        name="Bright Angel Trail",
        category="hiking",
        description="Switchbacks from the South Rim down to the river",
        location_name="Grand Canyon National Park",
        location_id="3",
        difficulty_level=4,
        distance_miles=9.5,
        estimated_duration_hours=6,
    ),
    Activity(
        id="4",
        name="White Rock Lake Loop",
        category="cycling",
        description="Paved loop around the lake",
        location_name="White Rock Lake Park",
        location_id="4",
        difficulty_level=1,
        distance_miles=9.3,
        estimated_duration_hours=1.5,
    ),
    Activity(
        id="5",
        name="DORBA Trail",
        category="mountain_biking",
        description="Singletrack loops through cedar brakes",
        location_name="Cedar Hill State Park",
        location_id="5",
        difficulty_level=3,
        distance_miles=12,
        estimated_duration_hours=2,
    ),
    Activity(
        id="6",
        name="Dinosaur Track Walk",
        category="hiking",
        description="Short walk to the river crossings with visible tracks",
        location_name="Dinosaur Valley State Park",
        location_id="6",
        difficulty_level=1,
        distance_miles=1,
        estimated_duration_hours=1,
    ),
    Activity(
        id="7",
        name="Striper Fishing",
        category="fishing",
        description="Guided striped bass trips from the marinas",
        location_name="Lake Texoma",
        location_id="7",
        difficulty_level=2,
        estimated_duration_hours=4,
    ),
    Activity(
        id="8",
        name="Greenbelt Ride",
        category="horseback_riding",
        description="Equestrian trail along the Elm Fork",
        location_name="Ray Roberts Lake State Park",
        location_id="8",
        difficulty_level=2,
        distance_miles=20,
        estimated_duration_hours=3,
    ),
    Activity(
        id="9",
        name="Arbor Hills Nature Trail",
        category="hiking",
        description="Unpaved loop through prairie and creek bottom",
        location_name="Arbor Hills Nature Preserve",
        location_id="9",
        difficulty_level=1,
        distance_miles=3,
        estimated_duration_hours=1,
    ),
    Activity(
        id="10",
        name="Lake Paddle",
        category="paddling",
        description="Canoe and kayak rentals on the spring-fed lake",
        location_name="Tyler State Park",
        location_id="10",
        difficulty_level=1,
        distance_miles=2,
        estimated_duration_hours=1.5,
    ),
]
