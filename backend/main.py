"""
Tabber Backend API

A FastAPI backend for splitting bills and paying back friends.
This module sets up the app and mounts routers - all endpoint logic is in routers/.
"""

import os
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import models
from database import engine

# Import routers
from routers import auth, friends, transactions, devices


logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

# Create database tables
models.Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(
    title="Tabber API",
    description="API for tracking bills and paybacks between friends",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(friends.router)
app.include_router(transactions.router)
app.include_router(devices.router)
