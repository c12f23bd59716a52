"""Approximate road distances (km) and coordinates for the Kilinochchi District."""

from __future__ import annotations

from ..models.domain import Coordinates

DEPOT = "Kilinochchi Town"

DISTANCE_TABLE: dict[str, dict[str, float]] = {
    "Paranthan": {
        "Paranthan": 0, "Poonagary": 5, "Kilinochchi Town": 10, "Ramanathapuram": 15, "Uruthirapuram": 8,
        "Akkarayankulam": 12, "Mulankavil": 18, "Pallai": 20, "Kandawalai": 25, "Murikandy": 7,
        "Thiruvaiaru": 22, "Nachchikuda": 14, "Anaivilunthan": 16, "Puthukudiyiruppu": 9, "Jayapuram": 11,
        "Elephant Pass": 30, "Iranamadu": 35, "Mankulam": 40, "Puliyankulam": 28, "Vavuniya Road": 45,
        "Oddusuddan": 50, "Kanakapuram": 55, "Karachchi": 60, "Mallavi": 65, "Thunukkai": 70,
    },
    "Poonagary": {
        "Paranthan": 5, "Poonagary": 0, "Kilinochchi Town": 8, "Ramanathapuram": 12, "Uruthirapuram": 6,
        "Akkarayankulam": 10, "Mulankavil": 15, "Pallai": 18, "Kandawalai": 22, "Murikandy": 4,
        "Thiruvaiaru": 20, "Nachchikuda": 12, "Anaivilunthan": 14, "Puthukudiyiruppu": 7, "Jayapuram": 9,
        "Elephant Pass": 28, "Iranamadu": 33, "Mankulam": 38, "Puliyankulam": 26, "Vavuniya Road": 43,
        "Oddusuddan": 48, "Kanakapuram": 53, "Karachchi": 58, "Mallavi": 63, "Thunukkai": 68,
    },
    "Kilinochchi Town": {
        "Paranthan": 10, "Poonagary": 8, "Kilinochchi Town": 0, "Ramanathapuram": 6, "Uruthirapuram": 4,
        "Akkarayankulam": 5, "Mulankavil": 10, "Pallai": 12, "Kandawalai": 15, "Murikandy": 6,
        "Thiruvaiaru": 14, "Nachchikuda": 8, "Anaivilunthan": 10, "Puthukudiyiruppu": 3, "Jayapuram": 5,
        "Elephant Pass": 25, "Iranamadu": 30, "Mankulam": 35, "Puliyankulam": 23, "Vavuniya Road": 40,
        "Oddusuddan": 45, "Kanakapuram": 50, "Karachchi": 55, "Mallavi": 60, "Thunukkai": 65,
    },
    "Akkarayankulam": {
        "Paranthan": 12, "Poonagary": 10, "Kilinochchi Town": 5, "Ramanathapuram": 8, "Uruthirapuram": 6,
        "Akkarayankulam": 0, "Mulankavil": 8, "Pallai": 10, "Kandawalai": 12, "Murikandy": 8,
        "Thiruvaiaru": 15, "Nachchikuda": 5, "Anaivilunthan": 7, "Puthukudiyiruppu": 4, "Jayapuram": 3,
        "Elephant Pass": 20, "Iranamadu": 25, "Mankulam": 30, "Puliyankulam": 18, "Vavuniya Road": 35,
        "Oddusuddan": 40, "Kanakapuram": 45, "Karachchi": 50, "Mallavi": 55, "Thunukkai": 60,
    },
    "Murikandy": {
        "Paranthan": 7, "Poonagary": 4, "Kilinochchi Town": 6, "Ramanathapuram": 10, "Uruthirapuram": 5,
        "Akkarayankulam": 8, "Mulankavil": 12, "Pallai": 15, "Kandawalai": 18, "Murikandy": 0,
        "Thiruvaiaru": 16, "Nachchikuda": 10, "Anaivilunthan": 12, "Puthukudiyiruppu": 6, "Jayapuram": 8,
        "Elephant Pass": 25, "Iranamadu": 30, "Mankulam": 35, "Puliyankulam": 23, "Vavuniya Road": 40,
        "Oddusuddan": 45, "Kanakapuram": 50, "Karachchi": 55, "Mallavi": 60, "Thunukkai": 65,
    },
}

COORDINATES: dict[str, Coordinates] = {
    "Paranthan": Coordinates(9.4297, 80.3683),
    "Poonagary": Coordinates(9.4850, 80.2350),
    "Kilinochchi Town": Coordinates(9.3850, 80.3980),
    "Ramanathapuram": Coordinates(9.3780, 80.4180),
    "Uruthirapuram": Coordinates(9.3950, 80.3850),
    "Akkarayankulam": Coordinates(9.3750, 80.4050),
    "Mulankavil": Coordinates(9.3650, 80.4150),
    "Pallai": Coordinates(9.4550, 80.3250),
    "Kandawalai": Coordinates(9.4450, 80.3350),
    "Murikandy": Coordinates(9.4750, 80.2450),
    "Thiruvaiaru": Coordinates(9.4650, 80.3150),
    "Nachchikuda": Coordinates(9.3650, 80.4250),
    "Anaivilunthan": Coordinates(9.3550, 80.4350),
    "Puthukudiyiruppu": Coordinates(9.3900, 80.4000),
    "Jayapuram": Coordinates(9.3700, 80.4100),
    "Elephant Pass": Coordinates(9.4850, 80.4850),
    "Iranamadu": Coordinates(9.4950, 80.4950),
    "Mankulam": Coordinates(9.5050, 80.5050),
    "Puliyankulam": Coordinates(9.4750, 80.4750),
    "Vavuniya Road": Coordinates(9.5150, 80.5150),
    "Oddusuddan": Coordinates(9.5250, 80.5250),
    "Kanakapuram": Coordinates(9.5350, 80.5350),
    "Karachchi": Coordinates(9.5450, 80.5450),
    "Mallavi": Coordinates(9.5550, 80.5550),
    "Thunukkai": Coordinates(9.5650, 80.5650),
}
